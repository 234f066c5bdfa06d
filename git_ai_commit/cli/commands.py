"""CLI Commands"""

import os
import sys
from dataclasses import replace

from git_ai_commit.config import ENV_OVERRIDES, GITHUB_TOKEN_VARS, get_config_path, load_config
from git_ai_commit.output import bold, dim, info, success, warning


def _secret_status(*names: str) -> str:
    for name in names:
        if os.environ.get(name):
            return success(f"set ({name})")
    return warning("not set")


def display_config() -> int:
    """Display current configuration."""
    config = replace(load_config()).apply_env()
    config_path = get_config_path()

    print(f"\n{bold('Current Configuration')}\n")

    if config_path:
        print(f"  {dim('Loaded from:')} {config_path}")
    else:
        print(f"  {dim('Loaded from:')} defaults (no .gitaicommitrc found)")

    overrides = [(name, os.environ[name]) for name in ENV_OVERRIDES if os.environ.get(name)]
    if overrides:
        print(f"  {dim('Environment overrides:')}")
        for name, value in overrides:
            print(f"    {name}={value}")

    print()
    print(f"  {bold('Settings:')}")
    settings = {"model": "provider default", **config.to_dict()}
    for key in ("provider", "model", "base_branch", "remote", "max_subject_length"):
        print(f"    {key + ':':<20}{info(str(settings[key]))}")

    print()
    print(f"  {bold('Credentials:')}")
    print(f"    Gemini:    {_secret_status('GEMINI_API_KEY')}")
    print(f"    Anthropic: {_secret_status('ANTHROPIC_API_KEY')}")
    print(f"    GitHub:    {_secret_status(*GITHUB_TOKEN_VARS)} {dim('(needed for --pr)')}")

    print(f"\n  {dim('Config locations:')}")
    print("    Local:  .gitaicommitrc (in current directory)")
    print("    Global: ~/.gitaicommitrc\n")

    return 0


def run_install_completion() -> int:
    """Print shell tab completion setup."""
    shell = os.environ.get('SHELL', '')
    line = 'eval "$(register-python-argcomplete gac)"'

    print(f"\n{bold('Tab Completion Setup')}\n")

    if 'zsh' in shell or 'bash' in shell:
        rc_file = os.path.expanduser('~/.zshrc' if 'zsh' in shell else '~/.bashrc')
        print(f"Add this line to {dim(rc_file)}:\n")
        print(f"  {line}\n")
        print(f"Then run: {dim('source ' + rc_file)}")
    elif sys.platform == 'win32':
        print("For PowerShell, add to your $PROFILE:\n")
        print("  register-python-argcomplete --shell powershell gac | Out-String | Invoke-Expression")
    else:
        print("Run one of these based on your shell:\n")
        print(f"  {dim('# Bash/Zsh')}")
        print(f"  {line}\n")
        print(f"  {dim('# Fish')}")
        print("  register-python-argcomplete --shell fish gac | source")

    print(f"\n{dim('After setup, press TAB to autocomplete commands and flags.')}")
    return 0

"""
Git AI Commit

AI-drafted commits and pull requests from staged git changes.
"""

__version__ = "1.0.0"

# Centralized commit types - single source of truth
# Used by: prompts/builder.py, commit/parser.py (title check), output (colours)
COMMIT_TYPES = {
    'feat': 'A new feature or capability',
    'fix': 'A bug fix',
    'docs': 'Documentation only changes',
    'style': 'Formatting, whitespace, no code change',
    'refactor': 'Code restructuring without behavior change',
    'perf': 'Performance improvement',
    'test': 'Adding or updating tests',
    'build': 'Build system or external dependency changes',
    'ci': 'CI/CD configuration changes',
    'chore': 'Maintenance tasks, dependencies, tooling',
    'revert': 'Reverts a previous commit',
}

COMMIT_TYPE_NAMES = list(COMMIT_TYPES.keys())

# Scopes the model is allowed to pick from
COMMIT_SCOPES = ['auth', 'db', 'ui', 'api', 'deps', 'core', 'test']

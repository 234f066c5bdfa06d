"""Commit Record - Validated title/body pair passed from generation to publishing."""

from dataclasses import dataclass


@dataclass(frozen=True)
class CommitRecord:
    title: str
    body: tuple[str, ...] = ()

    def __post_init__(self):
        if not self.title or not self.title.strip():
            raise ValueError("CommitRecord title must not be empty")
        # Lists coming from JSON are frozen here so the record stays hashable
        object.__setattr__(self, "body", tuple(self.body))

    @property
    def body_text(self) -> str:
        return "\n".join(self.body)

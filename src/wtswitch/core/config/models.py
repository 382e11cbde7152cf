"""
Configuration data models for wtswitch.

These models define the structure of .wtswitch.json and
~/.config/wtswitch/config.json files, with validation via Pydantic.
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator


class WorktreesConfig(BaseModel):
    """
    Where new worktrees go.

    Read-only once built: the service receives an instance at construction
    and never changes it.

    Example:
        >>> config = WorktreesConfig(base_path="../.worktrees")
        >>> config.path_template
        '{branch}'
    """

    base_path: str = Field(
        default="..",
        description="Directory for new worktrees, relative to the git common dir",
    )
    path_template: str = Field(
        default="{branch}",
        description="Path of a new worktree under base_path; {branch} is the branch name",
    )

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
    )

    @field_validator("base_path", "path_template")
    @classmethod
    def validate_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("must not be empty")
        return v

"""OperationInput models."""

from typing import Annotated, Literal

from pydantic import BaseModel, Field


class ShellOperationInput(BaseModel):
    type: Literal["shell"] = "shell"
    command: str
    working_dir: str | None = None


class FileOperationInput(BaseModel):
    type: Literal["file"] = "file"
    operation: str
    path: str
    content: str | None = None


class GitOperationInput(BaseModel):
    type: Literal["git"] = "git"
    operation: str
    repository: str
    affected_files: list[str] = Field(default_factory=list)
    message: str | None = None


OperationInput = Annotated[
    ShellOperationInput | FileOperationInput | GitOperationInput,
    Field(discriminator="type"),
]

from __future__ import annotations

from pydantic import BaseModel, Field


class Settings(BaseModel):
    """Configuration settings for the merge_files module."""

    source: str = Field(default="", description="Source directory.")
    output: str = Field(default="", description="Output file.")
    no_git: bool = Field(default=False, description="Do not use git ls-files.")
    assume_yes: bool = Field(default=False, description="Overwrite an existing output without asking.")
    numbered: bool = Field(default=False, description="Number the file headers.")
    file_command: bool = Field(default=False, description="Classify content with the `file` utility.")
    log_file: str = Field(default="", description="Log file path.")
    log_json: bool = Field(default=False, description="Render logs as JSON lines.")

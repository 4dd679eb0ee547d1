"""
exproto Configuration

Handles configuration from environment variables, JSON files, and CLI arguments.
A Config is built once at startup and passed explicitly to the extractor.
"""

import json
import os
from dataclasses import dataclass, field
from typing import List, Optional


DEFAULT_CPP_COMMAND = ["cpp", "-C"]

OUTPUT_FORMATS = ["text", "json"]

LOG_LEVELS = ["TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"]


def _env_flag(name: str) -> bool:
    return os.environ.get(name, "").lower() in ("1", "true", "yes", "on")


@dataclass
class Config:
    """exproto configuration"""

    # Prototype filter
    include_comments: bool = False
    include_statics: bool = False

    # Preprocessing
    use_cpp: bool = False
    cpp_command: List[str] = field(default_factory=lambda: list(DEFAULT_CPP_COMMAND))
    cpp_args: List[str] = field(default_factory=list)  # Passed through verbatim

    # I/O
    input_path: Optional[str] = None  # None or "-" means stdin
    output_path: Optional[str] = None  # None means stdout
    output_format: str = "text"  # text | json

    # Logging
    log_level: str = "WARNING"
    log_file: Optional[str] = None

    @classmethod
    def from_json(cls, json_path: str) -> "Config":
        """Load configuration from JSON file"""
        with open(json_path, "r") as f:
            data = json.load(f)

        cpp_command = data.get("cpp_command", DEFAULT_CPP_COMMAND)
        if isinstance(cpp_command, str):
            cpp_command = cpp_command.split()

        return cls(
            include_comments=data.get("include_comments", False),
            include_statics=data.get("include_statics", False),
            use_cpp=data.get("use_cpp", False),
            cpp_command=list(cpp_command),
            cpp_args=list(data.get("cpp_args", [])),
            input_path=data.get("input"),
            output_path=data.get("output"),
            output_format=data.get("output_format", "text"),
            log_level=data.get("log_level", "WARNING"),
            log_file=data.get("log_file"),
        )

    @classmethod
    def from_env(cls) -> "Config":
        """Load configuration from environment variables"""
        cpp_command = os.environ.get("EXPROTO_CPP_COMMAND")

        return cls(
            include_comments=_env_flag("EXPROTO_COMMENTS"),
            include_statics=_env_flag("EXPROTO_STATICS"),
            use_cpp=_env_flag("EXPROTO_CPP"),
            cpp_command=cpp_command.split() if cpp_command else list(DEFAULT_CPP_COMMAND),
            output_format=os.environ.get("EXPROTO_FORMAT", "text"),
            log_level=os.environ.get("EXPROTO_LOG_LEVEL", "WARNING").upper(),
            log_file=os.environ.get("EXPROTO_LOG_FILE"),
        )

    def merge(self, other: "Config") -> "Config":
        """Merge another config into this one (other takes precedence for non-default values)"""
        defaults = Config()
        for field_name in self.__dataclass_fields__:
            other_val = getattr(other, field_name)
            if other_val is not None and other_val != getattr(defaults, field_name):
                setattr(self, field_name, other_val)
        return self

    @property
    def reads_stdin(self) -> bool:
        return self.input_path is None or self.input_path == "-"

    @property
    def input_name(self) -> str:
        """Name the current-file tracker must match for output to be emitted"""
        if self.reads_stdin:
            return "<stdin>"
        return self.input_path

    def validate(self) -> List[str]:
        """Validate configuration, return list of errors"""
        errors = []

        if self.output_format not in OUTPUT_FORMATS:
            errors.append(f"Invalid output_format: {self.output_format}")

        if self.log_level not in LOG_LEVELS:
            errors.append(f"Invalid log_level: {self.log_level}")

        if self.use_cpp and not self.cpp_command:
            errors.append("use_cpp requires a non-empty cpp_command")

        return errors

    def to_dict(self) -> dict:
        """Convert to dictionary"""
        return {
            "include_comments": self.include_comments,
            "include_statics": self.include_statics,
            "use_cpp": self.use_cpp,
            "cpp_command": self.cpp_command,
            "cpp_args": self.cpp_args,
            "input": self.input_path,
            "output": self.output_path,
            "output_format": self.output_format,
            "log_level": self.log_level,
            "log_file": self.log_file,
        }

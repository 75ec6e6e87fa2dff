from enum import Enum
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class FileStatus(str, Enum):
    UNCHANGED = "UNCHANGED"
    FORMATTED = "FORMATTED"
    WOULD_REFORMAT = "WOULD_REFORMAT"
    ERROR = "ERROR"


class FormatSettings(BaseModel):
    model_config = ConfigDict(extra="forbid")

    print_width: int = Field(80, gt=0)
    tab_width: int = Field(2, gt=0)
    use_tabs: Optional[bool] = None
    format_code: bool = True
    names: Dict[str, Dict[str, str]] = Field(default_factory=dict)


class FileReport(BaseModel):
    file_path: str
    status: FileStatus
    errors: List[str] = Field(default_factory=list)

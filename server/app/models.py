from typing import List, Optional
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Wire models use camelCase field names, Python code uses snake_case."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

# ---- Request Models ----

class SourceFileInput(CamelModel):
    """A file snapshot the diagnostics refer to."""
    file_name: str
    text: str

class RelatedInformationInput(CamelModel):
    file: Optional[str] = None  # File name; must be one of the request's files
    start: Optional[int] = None
    length: Optional[int] = None
    message_text: str = ""

class DiagnosticInput(CamelModel):
    """A diagnostic as a TypeScript host reports it. ``start``/``length`` count UTF-16 code units."""
    code: int
    file: Optional[str] = None
    start: Optional[int] = None
    length: Optional[int] = None
    message_text: str = ""
    related_information: Optional[List[RelatedInformationInput]] = None

class FormatOptionsInput(CamelModel):
    indent_size: Optional[int] = None
    new_line_character: Optional[str] = None

class FixAllRequest(CamelModel):
    """Apply one fix across every matching diagnostic."""
    fix_id: str
    files: List[SourceFileInput] = []
    diagnostics: List[DiagnosticInput] = []
    format_options: Optional[FormatOptionsInput] = None

class FixesAtPositionRequest(CamelModel):
    """Request single-diagnostic actions for a position."""
    file_name: str
    start: int
    end: int
    error_codes: List[int] = []
    files: List[SourceFileInput] = []
    diagnostics: List[DiagnosticInput] = []
    format_options: Optional[FormatOptionsInput] = None

# ---- Response Models ----

class TextSpanOutput(CamelModel):
    """Span in UTF-16 code units, the unit TypeScript hosts apply edits in."""
    start: int
    length: int

class TextChangeOutput(CamelModel):
    span: TextSpanOutput
    new_text: str

class FileChangeOutput(CamelModel):
    file_name: str
    text_changes: List[TextChangeOutput] = []

class FixAllResponse(CamelModel):
    changes: List[FileChangeOutput] = []

class CodeFixActionOutput(CamelModel):
    fix_name: str
    description: str
    changes: List[FileChangeOutput] = []
    fix_id: Optional[str] = None
    fix_all_description: Optional[str] = None

class FixesAtPositionResponse(CamelModel):
    fixes: List[CodeFixActionOutput] = []

class CodeFixInfo(CamelModel):
    fix_ids: List[str]
    error_codes: List[int]

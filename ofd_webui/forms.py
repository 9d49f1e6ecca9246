"""
Form schemas for the filament and color variant edit forms.

Blank form inputs count as "unset" and come back as None, so the writer keeps
the stored value for them.
"""

import re
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Type

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

HEX_COLOR = re.compile(r"^#?([0-9a-fA-F]{6})$")
URL = re.compile(r"^https?://\S+$")
FOLDER_UNSAFE = re.compile(r'[<>:"/\\|?*\x00-\x1f]')

CHECKBOX_TRUE = {'on', 'true', '1', 'yes'}


def _check_entity_name(value: Any) -> Any:
    # Runs before type coercion: blanks arrive here as None
    if value is None:
        raise ValueError("Name is required")
    if not isinstance(value, str):
        return value
    value = value.strip()
    if not value:
        raise ValueError("Name is required")
    if FOLDER_UNSAFE.search(value) or value in ('.', '..'):
        raise ValueError('Name cannot contain < > : " / \\ | ? * or be "." / ".."')
    return value


class FormModel(BaseModel):
    model_config = ConfigDict(extra='ignore', str_strip_whitespace=True)


class FilamentForm(FormModel):
    """Editable attributes stored in filament.json."""
    name: str
    diameter_tolerance: Optional[float] = Field(default=None, gt=0)
    density: Optional[float] = Field(default=None, gt=0)
    max_dry_temperature: Optional[int] = Field(default=None, ge=0)
    data_sheet_url: Optional[str] = None
    safety_sheet_url: Optional[str] = None
    discontinued: Optional[bool] = None

    @field_validator('name', mode='before')
    @classmethod
    def _check_name(cls, value: Any) -> Any:
        return _check_entity_name(value)

    @field_validator('data_sheet_url', 'safety_sheet_url')
    @classmethod
    def _check_url(cls, value: Optional[str]) -> Optional[str]:
        if value is not None and not URL.match(value):
            raise ValueError("Must be an http(s) URL")
        return value


class VariantForm(FormModel):
    """A color variant; filament_weight/diameter describe one size entry."""
    color_name: str
    color_hex: str
    discontinued: Optional[bool] = None
    filament_weight: Optional[float] = Field(default=None, gt=0)
    diameter: Optional[float] = Field(default=None, gt=0)

    @field_validator('color_name', mode='before')
    @classmethod
    def _check_color_name(cls, value: Any) -> Any:
        return _check_entity_name(value)

    @field_validator('color_hex')
    @classmethod
    def _check_hex(cls, value: str) -> str:
        match = HEX_COLOR.match(value)
        if not match:
            raise ValueError("Must be a hex color like #1A2B3C")
        return f"#{match.group(1).upper()}"


@dataclass
class FormResult:
    """Outcome of validating a submitted form."""
    valid: bool
    data: Dict[str, Any] = field(default_factory=dict)
    errors: Dict[str, List[str]] = field(default_factory=dict)
    raw: Dict[str, Any] = field(default_factory=dict)


def _checkbox_fields(model: Type[FormModel]) -> List[str]:
    return [name for name, info in model.model_fields.items()
            if info.annotation in (bool, Optional[bool])]


def collect_form(model: Type[FormModel], form: Mapping[str, Any]) -> Dict[str, Any]:
    """Pick the model's fields out of submitted form data; blanks become None."""
    checkboxes = _checkbox_fields(model)
    raw: Dict[str, Any] = {}
    for name in model.model_fields:
        if name not in form:
            continue
        if name in checkboxes and hasattr(form, 'getlist'):
            # A hidden "false" input precedes the checkbox; the last value wins
            value = form.getlist(name)[-1]
        else:
            value = form.get(name)
        if isinstance(value, str):
            value = value.strip()
            if value == '':
                value = None
            elif name in checkboxes:
                value = value.lower() in CHECKBOX_TRUE
        raw[name] = value
    return raw


def parse_form(model: Type[FormModel], form: Mapping[str, Any]) -> FormResult:
    """Validate submitted form data against `model`."""
    raw = collect_form(model, form)
    try:
        parsed = model.model_validate(raw)
    except ValidationError as e:
        errors: Dict[str, List[str]] = {}
        for error in e.errors():
            loc = str(error['loc'][0]) if error['loc'] else '__all__'
            message = error['msg']
            if message.startswith('Value error, '):
                message = message[len('Value error, '):]
            errors.setdefault(loc, []).append(message)
        return FormResult(valid=False, errors=errors, raw=raw)

    # Only fields the client actually sent; unsent ones must not overwrite stored values
    data = parsed.model_dump(include=set(raw))
    return FormResult(valid=True, data=data, raw=raw)


def form_from_attributes(model: Type[FormModel], attributes: Mapping[str, Any]) -> FormResult:
    """Pre-populate a form from stored entity attributes (no validation)."""
    raw = {name: attributes.get(name) for name in model.model_fields if name in attributes}
    return FormResult(valid=True, data=dict(raw), raw=raw)
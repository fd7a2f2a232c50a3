"""
Pydantic Schemas - Request bodies and update field masks.

Request fields are deliberately loose (Optional, str-or-number): the
handlers escape and check every value themselves so an empty or missing
field yields the same plain-text 400 as an invalid one.
"""

from pydantic import BaseModel, ConfigDict, Field
from typing import Any, Dict, FrozenSet, List, Optional, Union

from jobmatch.core.errors import InvalidInput
from jobmatch.utils.validators import clean_email, escape, is_numeric

Scalar = Union[int, float, str]


# ============================================================
# ACCOUNT SCHEMAS
# ============================================================

class InitRequest(BaseModel):
    firebaseID: Optional[str] = None


class JobseekerCreate(BaseModel):
    firebaseID: Optional[str] = None
    name: Optional[str] = None
    email: Optional[str] = None


class EmployerCreate(BaseModel):
    firebaseID: Optional[str] = None
    name: Optional[str] = None
    email: Optional[str] = None
    company: Optional[Scalar] = None


# ============================================================
# FIELD MASKS (PUT /jobseeker/{uid}, PUT /employer/{uid})
# ============================================================

# Keys a client may send but that are never written
IGNORED_UPDATE_KEYS = frozenset({"uid", "firebaseID", "fb_id"})


class FieldMask(BaseModel):
    """
    A partial column assignment validated against an allow-list.

    Whatever keys are present get set; there is no merge with stored values.
    """

    model_config = ConfigDict(frozen=True)

    values: Dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def build(
        cls,
        data: Dict[str, Any],
        allowed: FrozenSet[str],
        numeric: FrozenSet[str] = frozenset(),
        emails: FrozenSet[str] = frozenset(),
        booleans: FrozenSet[str] = frozenset(),
    ) -> "FieldMask":
        values: Dict[str, Any] = {}
        for key, raw in data.items():
            if key in IGNORED_UPDATE_KEYS:
                continue
            if key not in allowed:
                raise InvalidInput(f"Invalid field: {escape(key)}")
            if key in booleans:
                values[key] = _as_bool(raw, key)
            elif key in numeric:
                if raw is None or not is_numeric(escape(raw)):
                    raise InvalidInput(f"Invalid {key}")
                values[key] = float(raw) if "." in str(raw) else int(raw)
            elif key in emails:
                values[key] = clean_email(raw)
            else:
                values[key] = escape(raw) if raw is not None else None
        if not values:
            raise InvalidInput("No fields to update")
        return cls(values=values)

    @property
    def columns(self) -> List[str]:
        return sorted(self.values)

    def assignments(self) -> str:
        """SET clause with one bound parameter per column."""
        return ", ".join(f"{col} = :{col}" for col in self.columns)


def _as_bool(raw: Any, key: str) -> bool:
    if isinstance(raw, bool):
        return raw
    text = str(raw).strip().lower()
    if text in ("true", "1", "yes"):
        return True
    if text in ("false", "0", "no"):
        return False
    raise InvalidInput(f"Invalid {key}")


JOBSEEKER_MUTABLE = frozenset({
    "name", "email_address", "phone_number", "location",
    "acceptance_wage", "goal_wage", "open_relocation",
})
JOBSEEKER_NUMERIC = frozenset({"acceptance_wage", "goal_wage"})
JOBSEEKER_BOOLEAN = frozenset({"open_relocation"})

EMPLOYER_MUTABLE = frozenset({"name", "email_address", "company_id"})
EMPLOYER_NUMERIC = frozenset({"company_id"})

EMAIL_COLUMNS = frozenset({"email_address"})


# ============================================================
# SUB-RESOURCE SCHEMAS
# ============================================================

class SkillAdd(BaseModel):
    skill: Optional[str] = None
    ranking: Optional[Scalar] = 0
    level: Optional[Scalar] = None
    years: Optional[Scalar] = None


class SkillDelete(BaseModel):
    skill: Optional[str] = None


class DreamCareerAdd(BaseModel):
    dream_career: Optional[str] = None
    ranking: Optional[Scalar] = 0


class DreamCompanyAdd(BaseModel):
    dream_company: Optional[str] = None
    preference: Optional[Scalar] = 0


class DreamCompanyDelete(BaseModel):
    dream_company: Optional[str] = None


class ExperienceBody(BaseModel):
    exp_id: Optional[Scalar] = None
    title: Optional[str] = None
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    description: Optional[str] = None


class EducationBody(BaseModel):
    ed_id: Optional[Scalar] = None
    school_name: Optional[str] = None
    start_date: Optional[str] = None
    grad_date: Optional[str] = None
    program: Optional[str] = None


class CertificationBody(BaseModel):
    c_id: Optional[Scalar] = None
    cert_name: Optional[str] = None
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    issuer: Optional[str] = None


class SecondaryKeyBody(BaseModel):
    """Body of a DELETE that may carry the row id instead of the path."""

    ed_id: Optional[Scalar] = None
    c_id: Optional[Scalar] = None
    exp_id: Optional[Scalar] = None

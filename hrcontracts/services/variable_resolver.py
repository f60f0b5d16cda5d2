# =====================================================
# FILE: hrcontracts/services/variable_resolver.py
# Variable dictionary construction and placeholder substitution
# =====================================================

from dataclasses import dataclass, field
from datetime import date, datetime
from html import escape
from typing import Any, Dict, List, Optional, Mapping, Tuple
import logging
import re

from hrcontracts.core.config import settings

logger = logging.getLogger(__name__)

# One pass over the document; the inner group is the raw placeholder name
PLACEHOLDER_RE = re.compile(r"\{\{([^{}]+)\}\}")

_CAMEL_BOUNDARY_RE = re.compile(r"([A-Z])")


@dataclass
class SubstitutionResult:
    text: str
    replacements: int = 0
    skipped_keys: List[str] = field(default_factory=list)
    unresolved: List[str] = field(default_factory=list)


# =====================================================
# DICTIONARY
# =====================================================

def _snake_to_camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.capitalize() for part in rest)


def _field(record: Any, name: str) -> Any:
    """Read a snake_case field from an ORM object or a mapping (snake or camel keys)"""
    if record is None:
        return None
    if isinstance(record, Mapping):
        if name in record:
            return record[name]
        return record.get(_snake_to_camel(name))
    return getattr(record, name, None)


def format_date(value: Any) -> str:
    """Render a calendar date with the configured format; unparseable values pass through"""
    if value is None or value == "":
        return ""
    if isinstance(value, (date, datetime)):
        return value.strftime(settings.CONTRACT_DATE_FORMAT)
    if isinstance(value, str):
        try:
            return datetime.fromisoformat(value).strftime(settings.CONTRACT_DATE_FORMAT)
        except ValueError:
            return value
    return str(value)


def _text(value: Any, default: str = "") -> str:
    if value is None or value == "":
        return default
    return str(value)


def _joined(value: Any) -> str:
    if not value:
        return ""
    if isinstance(value, str):
        return value
    return ", ".join(str(item) for item in value if item is not None)


def build_dictionary(employee: Any, employment: Any = None, company: Any = None,
                     today: Optional[date] = None) -> Dict[str, str]:
    """
    Flatten the employee, employment and company records into the
    placeholder dictionary used for one generation request.
    """
    today = today or date.today()
    first_name = _text(_field(employee, "first_name"))
    last_name = _text(_field(employee, "last_name"))

    return {
        # Employee variables
        "firstName": first_name,
        "lastName": last_name,
        "fullName": f"{first_name} {last_name}".strip(),
        "email": _text(_field(employee, "email")),
        "phone": _text(_field(employee, "phone")),
        "address": _text(_field(employee, "address")),
        "dateOfBirth": format_date(_field(employee, "date_of_birth")),
        "nationalInsuranceNumber": _text(_field(employee, "national_insurance_number")),
        "gender": _text(_field(employee, "gender")),
        "maritalStatus": _text(_field(employee, "marital_status")),
        "emergencyContactName": _text(_field(employee, "emergency_contact_name")),
        "emergencyContactPhone": _text(_field(employee, "emergency_contact_phone")),
        "emergencyContactRelationship": _text(_field(employee, "emergency_contact_relationship")),
        "passportNumber": _text(_field(employee, "passport_number")),
        "passportIssueDate": format_date(_field(employee, "passport_issue_date")),
        "passportExpiryDate": format_date(_field(employee, "passport_expiry_date")),
        "visaIssueDate": format_date(_field(employee, "visa_issue_date")),
        "visaExpiryDate": format_date(_field(employee, "visa_expiry_date")),
        "visaCategory": _text(_field(employee, "visa_category")),
        "dbsCertificateNumber": _text(_field(employee, "dbs_certificate_number")),

        # Employment variables
        "jobTitle": _text(_field(employment, "job_title")),
        "department": _text(_field(employment, "department")),
        "manager": _text(_field(employment, "manager"), "Management"),
        "employmentStatus": _text(_field(employment, "employment_status")),
        "baseSalary": _text(_field(employment, "base_salary"), "0"),
        "payFrequency": _text(_field(employment, "pay_frequency")),
        "startDate": format_date(_field(employment, "start_date")),
        "endDate": format_date(_field(employment, "end_date")),
        "location": _text(_field(employment, "location")),
        "weeklyHours": _text(_field(employment, "weekly_hours")),
        "paymentMethod": _text(_field(employment, "payment_method")),
        "taxCode": _text(_field(employment, "tax_code")),
        "benefits": _joined(_field(employment, "benefits")),
        "status": _text(_field(employment, "status"), "active"),

        # Company variables
        "companyName": _text(_field(company, "name")),
        "companyAddress": _text(_field(company, "address")),
        "companyPhone": _text(_field(company, "phone")),
        "companyEmail": _text(_field(company, "email")),
        "companyWebsite": _text(_field(company, "website")),
        "companyIndustry": _text(_field(company, "industry")),
        "companySize": _text(_field(company, "size")),

        # Computed
        "currentDate": format_date(today),
        "currentYear": str(today.year),
    }


# =====================================================
# SUBSTITUTION
# =====================================================

def key_variants(key: str) -> List[str]:
    """Spellings accepted for a key: exact, lower-cased and snake_case"""
    snake = _CAMEL_BOUNDARY_RE.sub(r"_\1", key).lower()
    if snake.startswith("_"):
        snake = snake[1:]
    return [key, key.lower(), snake]


def build_lookup(dictionary: Mapping[str, Any]) -> Tuple[Dict[str, str], List[str]]:
    """
    Case-insensitive lookup from every accepted spelling to its value.
    The first key in dictionary order wins when spellings collide.
    """
    lookup: Dict[str, str] = {}
    skipped: List[str] = []

    for key, value in dictionary.items():
        try:
            if not isinstance(key, str) or not key.strip():
                raise ValueError("placeholder key must be a non-empty string")
            if "{" in key or "}" in key:
                raise ValueError("placeholder key cannot contain braces")

            rendered = "" if value is None else str(value)
            for variant in key_variants(key):
                lookup.setdefault(variant.lower(), rendered)
        except Exception as e:
            logger.warning(f"Skipping placeholder key {key!r}: {str(e)}")
            skipped.append(repr(key) if not isinstance(key, str) else key)

    return lookup, skipped


def substitute(text: str, dictionary: Mapping[str, Any],
               escape_values: bool = False) -> SubstitutionResult:
    """
    Replace every {{placeholder}} whose name matches a dictionary key in any
    accepted spelling. Unknown placeholders are left untouched and inserted
    values are never scanned again.

    With escape_values the values are HTML-escaped, for text that is later
    passed through strip_markup.
    """
    lookup, skipped = build_lookup(dictionary)
    if escape_values:
        lookup = {key: escape(value, quote=False) for key, value in lookup.items()}
    result = SubstitutionResult(text=text, skipped_keys=skipped)
    unresolved = []

    def _replace(match):
        name = match.group(1)
        value = lookup.get(name.lower())
        if value is None:
            if name not in unresolved:
                unresolved.append(name)
            return match.group(0)
        result.replacements += 1
        return value

    result.text = PLACEHOLDER_RE.sub(_replace, text)
    result.unresolved = unresolved

    logger.info(
        f"🔤 Substituted {result.replacements} placeholders"
        + (f", {len(unresolved)} left unresolved" if unresolved else "")
    )
    return result

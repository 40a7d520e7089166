"""Rule configuration schema models using Pydantic."""

import re
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from build_notifier.utils.addresses import normalize_address
from build_notifier.utils.enums import CaseInsensitiveEnum


class TriggerCategory(CaseInsensitiveEnum):
    """Condition under which a group (or the modifier pass) is notified."""

    ALWAYS = "always"
    CHANGE = "change"
    FAILED = "failed"
    SUCCESS = "success"
    FIXED = "fixed"
    EXCEPTION = "exception"


class SubjectCategory(CaseInsensitiveEnum):
    """Outcome category used to select a subject template."""

    BROKEN = "broken"
    EXCEPTION = "exception"
    FIXED = "fixed"
    STILL_BROKEN = "still_broken"
    SUCCESS = "success"


class ConverterType(CaseInsensitiveEnum):
    """Supported username-to-address converter types."""

    DOMAIN = "domain"
    REGEX = "regex"
    LOWERCASE = "lowercase"


class LogLevel(str, Enum):
    """Logging levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class LogFormat(str, Enum):
    """Log output formats."""

    JSON = "json"
    KEY_VALUE = "key-value"


# Applied for every subject category the configuration leaves out.
DEFAULT_SUBJECTS: Dict[SubjectCategory, str] = {
    SubjectCategory.BROKEN: "${CCNetProject} Build Failed",
    SubjectCategory.EXCEPTION: "${CCNetProject} Exception in Build !",
    SubjectCategory.FIXED: "${CCNetProject} Build Fixed: Build ${CCNetLabel}",
    SubjectCategory.STILL_BROKEN: "${CCNetProject} is still broken",
    SubjectCategory.SUCCESS: "${CCNetProject} Build Successful: Build ${CCNetLabel}",
}


class UserConfig(BaseModel):
    """A named entry in the user directory."""

    name: str = Field(..., min_length=1, description="Source-control username (unique)")
    group: Optional[str] = Field(None, description="Name of the group this user belongs to")
    address: Optional[str] = Field(None, description="E-mail address for this user")

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        """Strip whitespace from the username."""
        stripped = v.strip()
        if not stripped:
            raise ValueError("Field cannot be empty or whitespace-only")
        return stripped

    @field_validator("group")
    @classmethod
    def strip_group(cls, v: Optional[str]) -> Optional[str]:
        """Strip whitespace from group reference, treating blanks as no group."""
        if v is None:
            return None
        stripped = v.strip()
        return stripped or None

    @field_validator("address")
    @classmethod
    def validate_address(cls, v: Optional[str]) -> Optional[str]:
        """Validate and normalize the e-mail address when one is given."""
        if v is None or not v.strip():
            return None
        try:
            return normalize_address(v)
        except ValueError as e:
            raise ValueError(f"Invalid email address '{v.strip()}': {e}") from e


class GroupConfig(BaseModel):
    """A named group tagged with exactly one trigger category."""

    name: str = Field(..., min_length=1, description="Group name (unique)")
    notification: TriggerCategory = Field(..., description="When members are notified")

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        stripped = v.strip()
        if not stripped:
            raise ValueError("Field cannot be empty or whitespace-only")
        return stripped

    @field_validator("notification", mode="before")
    @classmethod
    def parse_notification(cls, v: Any) -> TriggerCategory:
        return TriggerCategory.parse(v)


class ConverterConfig(BaseModel):
    """One step of the username-to-address converter chain."""

    type: ConverterType = Field(..., description="Converter type (domain, regex, lowercase)")
    domain: Optional[str] = Field(None, description="Domain appended by the domain converter")
    find: Optional[str] = Field(None, description="Regular expression for the regex converter")
    replace: str = Field("", description="Replacement text for the regex converter")

    @field_validator("type", mode="before")
    @classmethod
    def parse_type(cls, v: Any) -> ConverterType:
        return ConverterType.parse(v)

    @model_validator(mode="after")
    def validate_type_fields(self):
        """Check that the fields required by the converter type are present."""
        if self.type == ConverterType.DOMAIN:
            if not self.domain or not self.domain.strip().lstrip("@"):
                raise ValueError("Domain converter requires a non-empty 'domain'")
            self.domain = self.domain.strip().lstrip("@")
        elif self.type == ConverterType.REGEX:
            if not self.find:
                raise ValueError("Regex converter requires a non-empty 'find' pattern")
            try:
                re.compile(self.find)
            except re.error as e:
                raise ValueError(f"Invalid regex pattern '{self.find}': {e}") from e
        return self


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: LogLevel = Field(LogLevel.INFO, description="Log level")
    format: LogFormat = Field(
        LogFormat.KEY_VALUE, description="Log output format (json or key-value)"
    )

    model_config = {"use_enum_values": True}


class PublisherConfig(BaseModel):
    """Root rule configuration for the build notifier.

    After validation ``subjects`` always holds a template for every
    SubjectCategory: configured values win, the rest come from
    DEFAULT_SUBJECTS.
    """

    users: List[UserConfig] = Field(default_factory=list, description="User directory")
    groups: List[GroupConfig] = Field(default_factory=list, description="Group directory")
    converters: List[ConverterConfig] = Field(
        default_factory=list, description="Ordered username-to-address converter chain"
    )
    subjects: Dict[SubjectCategory, str] = Field(
        default_factory=dict, description="Subject templates keyed by outcome category"
    )
    subject_prefix: Optional[str] = Field(None, description="Text prepended to every subject")
    modifier_notification_types: List[TriggerCategory] = Field(
        default_factory=list,
        description="Categories under which contributors and failure users are notified",
    )
    logging: LoggingConfig = Field(
        default_factory=LoggingConfig, description="Logging configuration"
    )

    @field_validator("subjects", mode="before")
    @classmethod
    def parse_subject_keys(cls, v: Any) -> Any:
        """Resolve subject category keys, rejecting unknown categories."""
        if v is None:
            return {}
        if not isinstance(v, dict):
            return v
        return {SubjectCategory.parse(key): value for key, value in v.items()}

    @field_validator("modifier_notification_types", mode="before")
    @classmethod
    def parse_modifier_types(cls, v: Any) -> Any:
        if v is None:
            return []
        if isinstance(v, str):
            v = [v]
        if not isinstance(v, list):
            return v
        return [TriggerCategory.parse(item) for item in v]

    @field_validator("subject_prefix")
    @classmethod
    def strip_subject_prefix(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return None
        stripped = v.strip()
        return stripped or None

    @model_validator(mode="after")
    def validate_directories_and_fill_subjects(self):
        """Check directory keys for uniqueness and complete the subject map."""
        seen_users = set()
        for user in self.users:
            if user.name in seen_users:
                raise ValueError(f"Duplicate user: '{user.name}' appears multiple times")
            seen_users.add(user.name)

        seen_groups = set()
        for group in self.groups:
            if group.name in seen_groups:
                raise ValueError(f"Duplicate group: '{group.name}' appears multiple times")
            seen_groups.add(group.name)

        self.subjects = {
            category: self.subjects.get(category, DEFAULT_SUBJECTS[category])
            for category in SubjectCategory
        }

        return self

    def get_user(self, name: Optional[str]) -> Optional[UserConfig]:
        """Get a user by username."""
        if name is None:
            return None
        for user in self.users:
            if user.name == name:
                return user
        return None

    def get_group(self, name: Optional[str]) -> Optional[GroupConfig]:
        """Get a group by name."""
        if name is None:
            return None
        for group in self.groups:
            if group.name == name:
                return group
        return None

    def get_subject_template(self, category: SubjectCategory) -> str:
        """Get the subject template for an outcome category."""
        return self.subjects[category]

"""Core domain models for build results.

This module defines the read-only view of one build run that the
notifier consumes:
- IntegrationStatus: outcome of a build run
- Contributor: a user whose changes are part of the run
- BuildResult: immutable snapshot of one build cycle
"""

from typing import Any, Dict, List

from pydantic import BaseModel, Field, field_validator, model_validator

from build_notifier.utils.enums import CaseInsensitiveEnum


class IntegrationStatus(CaseInsensitiveEnum):
    """Outcome of a build run.

    UNKNOWN is what a first-ever run reports as its previous status.
    """

    SUCCESS = "success"
    FAILURE = "failure"
    EXCEPTION = "exception"
    UNKNOWN = "unknown"


class Contributor(BaseModel):
    """A user whose modifications are part of the current build run."""

    username: str = Field(..., min_length=1, description="Source-control username")

    @field_validator("username")
    @classmethod
    def strip_username(cls, v: str) -> str:
        """Strip whitespace from the username."""
        stripped = v.strip()
        if not stripped:
            raise ValueError("Field cannot be empty or whitespace-only")
        return stripped

    model_config = {"frozen": True}


class BuildResult(BaseModel):
    """Immutable snapshot of one build run.

    If ``fixed`` is not supplied it is derived: a successful run whose
    previous run failed or raised an exception is fixed.
    """

    status: IntegrationStatus = Field(..., description="Status of this run")
    previous_status: IntegrationStatus = Field(
        IntegrationStatus.UNKNOWN, description="Status of the preceding run"
    )
    fixed: bool = Field(False, description="Run succeeded after a failing run")
    contributors: List[Contributor] = Field(
        default_factory=list, description="Users whose changes are in this run"
    )
    failure_contributors: List[str] = Field(
        default_factory=list, description="Users implicated in a still-failing streak"
    )
    properties: Dict[str, Any] = Field(
        default_factory=dict, description="Named build properties for template substitution"
    )

    model_config = {"frozen": True}

    @model_validator(mode="before")
    @classmethod
    def derive_fixed(cls, data: Any) -> Any:
        """Fill ``fixed`` from the status transition when the caller omits it."""
        if not isinstance(data, dict) or data.get("fixed") is not None:
            return data
        try:
            status = IntegrationStatus(data.get("status"))
            previous = IntegrationStatus(data.get("previous_status", IntegrationStatus.UNKNOWN))
        except ValueError:
            # Left for field validation to report
            return data
        return {
            **data,
            "fixed": status == IntegrationStatus.SUCCESS
            and previous in (IntegrationStatus.FAILURE, IntegrationStatus.EXCEPTION),
        }

    @field_validator("status", "previous_status", mode="before")
    @classmethod
    def parse_status(cls, v: Any) -> IntegrationStatus:
        return IntegrationStatus.parse(v)

    @field_validator("contributors", mode="before")
    @classmethod
    def coerce_contributors(cls, v: Any) -> Any:
        """Accept plain usernames as well as contributor mappings."""
        if v is None:
            return []
        if not isinstance(v, list):
            return v
        return [{"username": item} if isinstance(item, str) else item for item in v]

    @field_validator("failure_contributors", mode="before")
    @classmethod
    def drop_blank_failure_contributors(cls, v: Any) -> Any:
        if v is None:
            return []
        if not isinstance(v, list):
            return v
        cleaned = []
        for item in v:
            if isinstance(item, str):
                item = item.strip()
                if not item:
                    continue
            cleaned.append(item)
        return cleaned

    @property
    def contributor_names(self) -> List[str]:
        """Usernames of the contributors, in build order."""
        return [contributor.username for contributor in self.contributors]

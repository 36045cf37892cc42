from __future__ import annotations

from datetime import date

from pydantic import BaseModel, ConfigDict, Field, model_validator


class DateWindow(BaseModel):
    """Inclusive calendar range a report covers."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    from_date: date = Field(alias="from")
    to_date: date = Field(alias="to")

    @model_validator(mode="after")
    def validate_order(self) -> "DateWindow":
        if self.from_date > self.to_date:
            raise ValueError(
                f"window start {self.from_date.isoformat()} is after end {self.to_date.isoformat()}"
            )
        return self

    def as_query(self) -> dict[str, str]:
        return {"from": self.from_date.isoformat(), "to": self.to_date.isoformat()}


class RawTimeEntry(BaseModel):
    model_config = ConfigDict(frozen=True)

    issue_id: int
    hours: float
    comment: str | None = None


class IssueMeta(BaseModel):
    model_config = ConfigDict(frozen=True)

    issue_id: int
    subject: str
    category: str


class AggregatedIssue(BaseModel):
    model_config = ConfigDict(frozen=True)

    issue_id: int
    subject: str
    category: str
    total_hours: float = 0.0
    comments: list[str] = Field(default_factory=list)

    @classmethod
    def from_meta(cls, meta: IssueMeta) -> "AggregatedIssue":
        return cls(issue_id=meta.issue_id, subject=meta.subject, category=meta.category)


class CategoryGroup(BaseModel):
    model_config = ConfigDict(frozen=True)

    category: str
    issues: list[AggregatedIssue] = Field(default_factory=list)

# src/pretraffic_gate/models.py
# Core Pydantic models for book records, probe payloads and hook events.

"""
Defines the data structures shared by the gate and the book handlers:
- Book: a record of the books table, as accepted by the create handler
- ProbeRecord: the synthetic book the gate writes during validation
- HookEvent: the lifecycle hook event sent by CodeDeploy
- InvocationContext: everything one gate run needs to know about its target
"""

import json
from typing import Any, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from pretraffic_gate.errors import InvalidEventError

# Reserved isbn for probe records. Never assigned to a real book.
PROBE_ISBN = "1-111-111-111"


class Book(BaseModel):
    """A book as stored in the books table."""

    isbn: str = Field(..., min_length=1, description="Partition key")
    title: str
    year: Union[str, int] = Field(..., description="Publication year")
    author: str
    publisher: str
    rating: Union[int, float]
    pages: int

    def to_item(self) -> dict[str, dict[str, str]]:
        """Render the book as a DynamoDB item with type descriptors."""
        return {
            "isbn": {"S": self.isbn},
            "title": {"S": self.title},
            "year": {"N": str(self.year)},
            "author": {"S": self.author},
            "publisher": {"S": self.publisher},
            "rating": {"N": str(self.rating)},
            "pages": {"N": str(self.pages)},
        }

    @classmethod
    def from_item(cls, item: dict[str, dict[str, str]]) -> "Book":
        """Build a book from a DynamoDB item, numbers parsed as integers."""
        return cls(
            isbn=item["isbn"]["S"],
            title=item["title"]["S"],
            year=int(item["year"]["N"]),
            author=item["author"]["S"],
            publisher=item["publisher"]["S"],
            rating=int(float(item["rating"]["N"])),
            pages=int(item["pages"]["N"]),
        )


class ProbeRecord(Book):
    """
    Synthetic book written by the gate and deleted once confirmed.

    Every field carries a deterministic placeholder so two runs produce
    the same item.
    """

    isbn: str = Field(default=PROBE_ISBN, min_length=1)
    title: str = "Smoke Test"
    year: Union[str, int] = "1111"
    author: str = "Test"
    publisher: str = "Test"
    rating: Union[int, float] = 1
    pages: int = 111

    def to_request(self) -> dict[str, str]:
        """Wrap the probe as the create handler's request payload."""
        return {"body": json.dumps(self.model_dump())}


class HookEvent(BaseModel):
    """Lifecycle hook event delivered by CodeDeploy."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    deployment_id: str = Field(..., alias="DeploymentId", min_length=1)
    hook_execution_id: str = Field(
        ..., alias="LifecycleEventHookExecutionId", min_length=1
    )

    @classmethod
    def parse(cls, event: Any) -> "HookEvent":
        """Validate a raw event, raising InvalidEventError when it is unusable."""
        if not isinstance(event, dict):
            raise InvalidEventError(
                f"Hook event must be an object, got {type(event).__name__}"
            )
        try:
            return cls.model_validate(event)
        except ValidationError as e:
            missing = ", ".join(
                str(err["loc"][0]) for err in e.errors() if err.get("loc")
            )
            raise InvalidEventError(f"Invalid hook event: {missing or e}") from e


class InvocationContext(BaseModel):
    """Immutable inputs for a single gate run."""

    model_config = ConfigDict(frozen=True)

    new_version_id: str = Field(..., min_length=1, description="Function to test")
    deployment_id: str = Field(..., min_length=1)
    hook_execution_id: str = Field(..., min_length=1)

    @classmethod
    def from_event(cls, event: Any, new_version_id: str) -> "InvocationContext":
        hook = HookEvent.parse(event)
        return cls(
            new_version_id=new_version_id,
            deployment_id=hook.deployment_id,
            hook_execution_id=hook.hook_execution_id,
        )

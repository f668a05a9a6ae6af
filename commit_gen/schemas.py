from enum import Enum
from typing import Optional

from pydantic import BaseModel, field_validator


class CommitMessageResponse(BaseModel):
    message: str

    @field_validator("message")
    @classmethod
    def reject_empty(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("The commit message must not be empty")
        return value


class FailureKind(str, Enum):
    PAYLOAD_TOO_LARGE = "payload_too_large"
    PROVIDER_FAILURE = "provider_failure"


class FailureResponse(BaseModel):
    kind: FailureKind
    message: str
    status_code: int


class Result:
    def __init__(
        self,
        value: Optional[CommitMessageResponse] = None,
        failure: Optional[FailureResponse] = None,
    ):
        self.value = value
        self.failure = failure

    @staticmethod
    def ok(value: CommitMessageResponse) -> "Result":
        return Result(value=value)

    @staticmethod
    def err(failure: FailureResponse) -> "Result":
        return Result(failure=failure)

    def is_ok(self) -> bool:
        return self.failure is None

    def is_err(self) -> bool:
        return not self.is_ok()

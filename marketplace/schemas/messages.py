from typing import List, Literal, Optional

from pydantic import field_validator

from .base import RequestSchema, check_length


class SendMessageSchema(RequestSchema):
    receiver_id: str
    content: str
    message_type: Literal["TEXT", "IMAGE", "FILE", "SYSTEM"] = "TEXT"
    booking_id: Optional[str] = None
    attachments: Optional[List[str]] = None

    @field_validator("receiver_id")
    @classmethod
    def check_receiver(cls, v):
        if not v:
            raise ValueError("Receiver ID is required")
        return v

    @field_validator("content")
    @classmethod
    def check_content(cls, v):
        return check_length(v, 1, 1000, "Message content must be between 1 and 1000 characters")


class MarkReadSchema(RequestSchema):
    message_ids: List[str]

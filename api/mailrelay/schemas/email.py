from typing import Literal

from pydantic import BaseModel, Field


class EmailRequest(BaseModel):
    to: str = Field(..., description="Email address of the recipient")
    from_email: str = Field(..., alias="from", description="Email address of the sender")
    subject: str = Field(..., description="Email subject line")
    body: str = Field(..., description="HTML content of the email")

    model_config = {"populate_by_name": True, "frozen": True}


class EmailAddress(BaseModel):
    email: str


class Personalization(BaseModel):
    to: list[EmailAddress]
    subject: str


class Content(BaseModel):
    type: Literal["text/html"] = "text/html"
    value: str


class ProviderPayload(BaseModel):
    """SendGrid v3 mail/send body."""
    personalizations: list[Personalization]
    from_: EmailAddress = Field(..., alias="from")
    content: list[Content]

    model_config = {"populate_by_name": True}

    @classmethod
    def from_request(cls, req: EmailRequest) -> "ProviderPayload":
        return cls(
            personalizations=[
                Personalization(to=[EmailAddress(email=req.to)], subject=req.subject)
            ],
            from_=EmailAddress(email=req.from_email),
            content=[Content(value=req.body)],
        )

    def to_json(self) -> dict:
        return self.model_dump(by_alias=True)

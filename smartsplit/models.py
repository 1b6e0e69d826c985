"""
Application-level user record.
"""

from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from common.auth.base import Session


class UserProfile(BaseModel):
    """
    User profile shared with the rest of the app.

    String fields are never None: absent values become "". Stored
    documents use the keys uid, email, name and phoneNumber.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    uid: str = Field(..., min_length=1, description="Identifier assigned by the identity provider")
    email: str = ""
    name: str = ""
    phone_number: str = Field("", alias="phoneNumber")

    @field_validator("email", "name", "phone_number", mode="before")
    @classmethod
    def _none_to_empty(cls, value: Any) -> Any:
        return "" if value is None else value

    @classmethod
    def from_session(cls, session: Session) -> "UserProfile":
        """Basic profile from the provider session only."""
        return cls(
            uid=session.uid,
            email=session.email,
            name=session.display_name,
            phone_number=session.phone_number,
        )

    @classmethod
    def from_document(cls, document: Dict[str, Any], uid: Optional[str] = None) -> "UserProfile":
        """
        Parse a stored profile document.

        Args:
            document: Stored document
            uid: Identifier the document was fetched by, used when the
                document has no uid of its own
        """
        data = dict(document)
        if uid and not data.get("uid"):
            data["uid"] = uid
        return cls.model_validate(data)

    def to_document(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True)

from pydantic import BaseModel

class CurrentUser(BaseModel):
    """Identity verified from the provider's bearer token."""
    id: str
    email: str | None = None
    name: str | None = None

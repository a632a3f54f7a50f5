from pydantic import BaseModel


class UploadRequest(BaseModel):
    """Raw photo upload. Field checks live in the endpoint so errors match the mobile client's expectations."""

    filename: str = ""
    base64: str = ""


class UploadResponse(BaseModel):
    url: str
    path: str

from pydantic import BaseModel


class MessageResponse(BaseModel):
    """Plain confirmation for operations with nothing else to return"""
    message: str

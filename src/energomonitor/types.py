"""Request payload types for the Energomonitor API.

Pydantic models describing structured values the client sends to the API.
Plain mappings with the same keys are accepted wherever these models are.
"""

from pydantic import BaseModel


class Resource(BaseModel):
    """Resource an authorization grants access to.

    See the resource object in the Energomonitor authorization docs. For
    example ``Resource(type="feed", name="200242", permissions=["r"])``.
    """

    type: str
    name: str
    permissions: list[str]

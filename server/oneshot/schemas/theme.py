from pydantic import BaseModel


class ThemeResponse(BaseModel):
    id: str
    name: str
    primary: str
    secondary: str
    accent: str
    description: str

    model_config = {"from_attributes": True}

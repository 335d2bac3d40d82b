from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from slowcinema.core.enums import ChangeFrequency

__all__ = [
    "SitemapEntry",
]


class SitemapEntry(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    url: str
    last_modified: str
    change_frequency: ChangeFrequency
    priority: float

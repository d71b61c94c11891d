from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """キャメルケースのJSONと相互変換するための基底スキーマ"""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

"""
Shared schema base classes.
"""

from typing import ClassVar

from pydantic import BaseModel, SerializerFunctionWrapHandler, model_serializer


class OmitUnsetModel(BaseModel):
    """
    Model whose optional fields are left out of the output when unset.

    Fields listed in ``OPTIONAL_FIELDS`` distinguish "explicitly false"
    from "not set". An unset value is stored as None and never written
    as ``null``; the key is simply absent.
    """

    OPTIONAL_FIELDS: ClassVar[frozenset[str]] = frozenset()

    @model_serializer(mode="wrap")
    def omit_unset_fields(self, handler: SerializerFunctionWrapHandler):
        data = handler(self)
        for name in self.OPTIONAL_FIELDS:
            if name in data and data[name] is None:
                del data[name]
        return data

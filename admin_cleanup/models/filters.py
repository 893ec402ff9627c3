"""
Typed query filters for record store calls.

Each variant renders itself to a MongoDB query document with ``to_query()``,
so repositories never receive ad hoc dictionaries.
"""

from typing import Annotated, Any, Dict, List, Literal, Union

from pydantic import BaseModel, ConfigDict, Field


class _FilterBase(BaseModel):
    model_config = ConfigDict(frozen=True)

    def to_query(self) -> Dict[str, Any]:
        raise NotImplementedError


class MatchAll(_FilterBase):
    """Matches every record in the collection"""
    kind: Literal["match_all"] = "match_all"

    def to_query(self) -> Dict[str, Any]:
        return {}


class Equals(_FilterBase):
    kind: Literal["equals"] = "equals"
    field: str
    value: Any

    def to_query(self) -> Dict[str, Any]:
        return {self.field: self.value}


class NotEquals(_FilterBase):
    kind: Literal["not_equals"] = "not_equals"
    field: str
    value: Any

    def to_query(self) -> Dict[str, Any]:
        return {self.field: {"$ne": self.value}}


class In(_FilterBase):
    """Set membership; an empty ``values`` list matches nothing"""
    kind: Literal["in"] = "in"
    field: str
    values: List[Any] = Field(default_factory=list)

    def to_query(self) -> Dict[str, Any]:
        return {self.field: {"$in": list(self.values)}}


class IsNotNull(_FilterBase):
    """Field is present and not null"""
    kind: Literal["is_not_null"] = "is_not_null"
    field: str

    def to_query(self) -> Dict[str, Any]:
        return {self.field: {"$ne": None}}


class AllOf(_FilterBase):
    """Conjunction of other filters"""
    kind: Literal["all_of"] = "all_of"
    filters: List["Filter"] = Field(default_factory=list)

    def to_query(self) -> Dict[str, Any]:
        clauses = [f.to_query() for f in self.filters]
        clauses = [c for c in clauses if c]

        merged: Dict[str, Any] = {}
        for clause in clauses:
            if merged.keys() & clause.keys():
                # Same field constrained twice, a plain merge would drop one
                return {"$and": clauses}
            merged.update(clause)
        return merged


Filter = Annotated[
    Union[MatchAll, Equals, NotEquals, In, IsNotNull, AllOf],
    Field(discriminator="kind"),
]

AllOf.model_rebuild()

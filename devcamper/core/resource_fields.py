"""Resource Field Allow-Lists — which fields each collection exposes to query strings.

Invariants:
    - Only names declared here can be filtered, sorted, selected or populated
    - Field names are the public (snake_case) names; they match ORM attributes 1:1
    - `id` is declared on every resource (always selected, final sort tie-break)

Design Decisions:
    - Explicit allow-list over passing query keys to the ORM: internal columns
      never become API surface by accident
    - Lookup ignores case and underscores so `averageCost`, `averagecost` and
      `average_cost` all name the same field
"""

from dataclasses import dataclass, field

from devcamper.core.domain_types import FieldType


@dataclass(frozen=True)
class FieldSpec:
    """One queryable field of a resource."""
    name: str
    type: FieldType
    filterable: bool = True
    sortable: bool = True


@dataclass(frozen=True)
class RelationSpec:
    """A related resource that `populate=` may embed, with the fields embedded."""
    name: str
    fields: tuple[str, ...]


def _canonical(name: str) -> str:
    return name.replace("_", "").lower()


@dataclass(frozen=True)
class ResourceFields:
    """Allow-list for one resource collection."""
    resource: str
    fields: tuple[FieldSpec, ...]
    relations: tuple[RelationSpec, ...] = ()
    _index: dict[str, FieldSpec] = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        object.__setattr__(
            self, "_index", {_canonical(f.name): f for f in self.fields},
        )

    def lookup(self, raw_name: str) -> FieldSpec | None:
        return self._index.get(_canonical(raw_name))

    def relation(self, raw_name: str) -> RelationSpec | None:
        wanted = _canonical(raw_name)
        for rel in self.relations:
            if _canonical(rel.name) == wanted:
                return rel
        return None


# ─── Resources ──────────────────────────────────────────────────

USER_FIELDS = ResourceFields(
    resource="user",
    fields=(
        FieldSpec("id", FieldType.UUID),
        FieldSpec("name", FieldType.STRING),
        FieldSpec("email", FieldType.STRING),
        FieldSpec("role", FieldType.STRING),
        FieldSpec("created_at", FieldType.DATETIME),
    ),
)

BOOTCAMP_FIELDS = ResourceFields(
    resource="bootcamp",
    fields=(
        FieldSpec("id", FieldType.UUID),
        FieldSpec("name", FieldType.STRING),
        FieldSpec("description", FieldType.STRING, filterable=False, sortable=False),
        FieldSpec("website", FieldType.STRING, sortable=False),
        FieldSpec("phone", FieldType.STRING, sortable=False),
        FieldSpec("email", FieldType.STRING, sortable=False),
        FieldSpec("address", FieldType.STRING, filterable=False, sortable=False),
        FieldSpec("careers", FieldType.STRING, filterable=False, sortable=False),
        FieldSpec("average_rating", FieldType.FLOAT),
        FieldSpec("average_cost", FieldType.INTEGER),
        FieldSpec("housing", FieldType.BOOLEAN),
        FieldSpec("job_assistance", FieldType.BOOLEAN),
        FieldSpec("job_guarantee", FieldType.BOOLEAN),
        FieldSpec("accept_gi", FieldType.BOOLEAN),
        FieldSpec("user_id", FieldType.UUID),
        FieldSpec("created_at", FieldType.DATETIME),
    ),
)

REVIEW_FIELDS = ResourceFields(
    resource="review",
    fields=(
        FieldSpec("id", FieldType.UUID),
        FieldSpec("title", FieldType.STRING),
        FieldSpec("text", FieldType.STRING, filterable=False, sortable=False),
        FieldSpec("rating", FieldType.INTEGER),
        FieldSpec("bootcamp_id", FieldType.UUID),
        FieldSpec("user_id", FieldType.UUID),
        FieldSpec("created_at", FieldType.DATETIME),
    ),
    relations=(
        RelationSpec("bootcamp", ("id", "name", "description")),
    ),
)

"""schema subpackage: static IIIF Presentation 3.0 rule tables.

Rules are data keyed by ``ResourceType``, not per-type classes:

- PROPERTY_MATRIX: property -> type -> REQUIRED/RECOMMENDED/OPTIONAL/...
- ITEMS_CONTAINMENT and is_valid_child_type: which types may nest where
- get_relationship_type: ownership vs. reference between parent and child
- BEHAVIOR_VALIDITY / DISJOINT_SETS and the other closed vocabularies
- get_minimum_template and friends: builders for new resources

Example::

    from iiif_tree.schema import get_relationship_type, is_valid_child_type

    get_relationship_type("Collection", "Manifest")  # RelationshipType.REFERENCE
    is_valid_child_type("Manifest", "Collection")    # False
"""

from __future__ import annotations

from iiif_tree.schema.containment import (
    ITEMS_CONTAINMENT,
    get_valid_child_types,
    is_valid_child_type,
)
from iiif_tree.schema.matrix import (
    PROPERTY_MATRIX,
    PropertyRequirement,
    ResourceSchema,
    get_allowed_properties,
    get_property_requirement,
    get_recommended_properties,
    get_required_properties,
    get_resource_schema,
    is_property_allowed,
)
from iiif_tree.schema.relationships import (
    RelationshipType,
    build_reference_map,
    can_have_multiple_parents,
    get_referencing_collections,
    get_relationship_type,
    is_standalone_type,
)
from iiif_tree.schema.templates import (
    create_language_map,
    create_metadata_entry,
    generate_default_label,
    generate_id,
    get_minimum_template,
    needs_context,
)
from iiif_tree.schema.vocabulary import (
    BEHAVIOR_VALIDITY,
    COMMON_RIGHTS_URIS,
    DISJOINT_SETS,
    PRESENTATION_CONTEXT,
    Behavior,
    Motivation,
    TimeMode,
    ViewingDirection,
    find_behavior_conflicts,
    get_rights_display_name,
    is_behavior_allowed,
    is_valid_rights_uri,
)

__all__ = [
    "BEHAVIOR_VALIDITY",
    "COMMON_RIGHTS_URIS",
    "DISJOINT_SETS",
    "ITEMS_CONTAINMENT",
    "PRESENTATION_CONTEXT",
    "PROPERTY_MATRIX",
    "Behavior",
    "Motivation",
    "PropertyRequirement",
    "RelationshipType",
    "ResourceSchema",
    "TimeMode",
    "ViewingDirection",
    "build_reference_map",
    "can_have_multiple_parents",
    "create_language_map",
    "create_metadata_entry",
    "find_behavior_conflicts",
    "generate_default_label",
    "generate_id",
    "get_allowed_properties",
    "get_minimum_template",
    "get_property_requirement",
    "get_recommended_properties",
    "get_referencing_collections",
    "get_relationship_type",
    "get_required_properties",
    "get_resource_schema",
    "get_rights_display_name",
    "get_valid_child_types",
    "is_behavior_allowed",
    "is_property_allowed",
    "is_standalone_type",
    "is_valid_child_type",
    "is_valid_rights_uri",
    "needs_context",
]

"""
Listing lifecycle - state rules for a property listing

A listing's state is the triple (approval, sale status, featured). The
functions here apply one transition to a Property row in memory; callers
own the session, the authorization check and the commit.
"""
from typing import Dict, NamedTuple, Optional
from primeproperty.models.property import Property
from primeproperty.utils.permissions import is_admin

SALE_STATUSES = ("for sale", "for rent", "sold")
DEFAULT_SALE_STATUS = "for sale"

# Which details variant each listing type accepts
DETAILS_KIND_BY_TYPE = {
    "house": "residential",
    "apartment": "residential",
    "land": "land",
    "office": "commercial",
    "commercial": "commercial",
}

EDITABLE_FIELDS = (
    "title",
    "description",
    "price",
    "location",
    "property_type",
    "status",
    "images",
    "details",
    "contact_phone",
    "contact_email",
)


class ListingState(NamedTuple):
    is_approved: bool
    sale_status: str
    is_featured: bool

    @property
    def is_public(self) -> bool:
        return self.is_approved


def listing_state(prop: Property) -> ListingState:
    return ListingState(
        is_approved=bool(prop.is_approved),
        sale_status=prop.status,
        is_featured=bool(prop.is_featured),
    )


def check_details_kind(property_type: str, kind: Optional[str]) -> None:
    """Raise ValueError when a details variant does not belong to the listing type"""
    if kind is None:
        return
    expected = DETAILS_KIND_BY_TYPE.get(property_type)
    if expected != kind:
        raise ValueError(f"Details of kind '{kind}' do not apply to a {property_type} listing")


def new_listing(actor: dict, data: Dict) -> Property:
    """Build a listing owned by the actor; admin listings skip moderation"""
    details = data.get("details")
    check_details_kind(data["type"], details.get("kind") if details else None)

    return Property(
        seller_id=actor["id"],
        title=data["title"],
        description=data.get("description"),
        price=data["price"],
        location=data["location"],
        property_type=data["type"],
        status=data.get("status") or DEFAULT_SALE_STATUS,
        images=list(data.get("images") or []),
        details=details,
        contact_phone=data.get("contact_phone"),
        contact_email=data.get("contact_email"),
        is_approved=is_admin(actor),
        is_featured=False,
    )


def apply_edit(prop: Property, actor: dict, changes: Dict, reapprove_on_edit: bool = False) -> ListingState:
    """
    Apply a partial content/status edit.

    Approval survives the edit unless reapprove_on_edit is set and the
    editor is not an admin, in which case the listing goes back to review.
    """
    changes = dict(changes)
    if "type" in changes:
        changes["property_type"] = changes.pop("type")

    new_type = changes.get("property_type") or prop.property_type
    if "details" in changes:
        details = changes["details"]
    else:
        details = prop.details
    check_details_kind(new_type, details.get("kind") if details else None)

    if changes.get("status") is not None and changes["status"] not in SALE_STATUSES:
        raise ValueError(f"Unknown sale status '{changes['status']}'")

    for key in EDITABLE_FIELDS:
        if key not in changes:
            continue
        value = changes[key]
        # Required columns ignore explicit nulls
        if value is None and key in ("title", "price", "location", "property_type", "status", "images"):
            continue
        setattr(prop, key, list(value) if key == "images" else value)

    if reapprove_on_edit and prop.is_approved and not is_admin(actor):
        prop.is_approved = False

    return listing_state(prop)


def approve(prop: Property) -> ListingState:
    """Unapproved -> Approved. Approving twice is a no-op; there is no way back."""
    prop.is_approved = True
    return listing_state(prop)


def set_featured(prop: Property, is_featured: bool) -> ListingState:
    prop.is_featured = bool(is_featured)
    return listing_state(prop)


def promote(prop: Property) -> ListingState:
    """Paid featuring. Already featured listings stay featured."""
    prop.is_featured = True
    return listing_state(prop)

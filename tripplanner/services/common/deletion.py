"""What happens to child rows when a parent row is deleted.

Every parent lists its children explicitly with one of three policies:

* CASCADE  - the children are deleted too, after their own children.
* UNLINK   - the children stay and their foreign key is cleared.
* RESTRICT - the delete is refused while any child exists.

Children are handled in the order they are listed. Nothing is committed
here; the caller commits once so the whole delete is a single unit.
"""
import enum
from typing import Dict, List, NamedTuple

from sqlalchemy import delete, func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from tripplanner.core.exceptions import BusinessRuleError
from tripplanner.core.logger import logger
from tripplanner.models.bookings.accommodation import Accommodation
from tripplanner.models.bookings.transportation import Transportation
from tripplanner.models.expense.expense_models import Budget, Expense
from tripplanner.models.itinerary.activity import Activity
from tripplanner.models.itinerary.itinerary_model import Itinerary, ItineraryActivity
from tripplanner.models.media.document import Document
from tripplanner.models.media.photo import Photo
from tripplanner.models.trips.note_model import TripNote
from tripplanner.models.trips.trip_model import Trip


class OnDelete(str, enum.Enum):
    CASCADE = "cascade"
    UNLINK = "unlink"
    RESTRICT = "restrict"


class ChildLink(NamedTuple):
    model: type
    foreign_key: str
    policy: OnDelete
    # Singular and plural nouns for the RESTRICT message
    label: str = ""
    plural: str = ""


DELETE_POLICIES: Dict[type, List[ChildLink]] = {
    Trip: [
        # Photos first: they point at itineraries and activities
        ChildLink(Photo, "trip_id", OnDelete.CASCADE),
        # Itineraries before activities so no itinerary activity blocks the activity delete
        ChildLink(Itinerary, "trip_id", OnDelete.CASCADE),
        ChildLink(Activity, "trip_id", OnDelete.CASCADE),
        ChildLink(Transportation, "trip_id", OnDelete.CASCADE),
        ChildLink(Accommodation, "trip_id", OnDelete.CASCADE),
        ChildLink(Expense, "trip_id", OnDelete.CASCADE),
        ChildLink(Budget, "trip_id", OnDelete.CASCADE),
        ChildLink(Document, "trip_id", OnDelete.CASCADE),
        ChildLink(TripNote, "trip_id", OnDelete.CASCADE),
    ],
    Itinerary: [
        ChildLink(ItineraryActivity, "itinerary_id", OnDelete.CASCADE),
        ChildLink(Photo, "itinerary_id", OnDelete.CASCADE),
    ],
    Activity: [
        ChildLink(ItineraryActivity, "activity_id", OnDelete.RESTRICT, "itinerary", "itineraries"),
        ChildLink(Photo, "activity_id", OnDelete.UNLINK),
    ],
    Budget: [
        ChildLink(Expense, "budget_id", OnDelete.UNLINK),
    ],
}


async def _apply_child_policies(db: AsyncSession, model, ids_stmt) -> None:
    for link in DELETE_POLICIES.get(model, []):
        child = link.model
        fk = getattr(child, link.foreign_key)

        if link.policy is OnDelete.RESTRICT:
            count = await db.scalar(select(func.count()).select_from(child).where(fk.in_(ids_stmt)))
            if count:
                noun = (link.label if count == 1 else link.plural) or child.__tablename__
                logger.warning(f"Delete of {model.__name__} blocked by {count} {child.__name__} row(s)")
                raise BusinessRuleError(
                    f"{model.__name__} is used in {count} {noun} and cannot be deleted",
                    count=count,
                )
        elif link.policy is OnDelete.UNLINK:
            await db.execute(
                update(child).where(fk.in_(ids_stmt)).values({link.foreign_key: None})
                .execution_options(synchronize_session=False)
            )
        else:
            child_ids = select(child.id).where(fk.in_(ids_stmt))
            await _apply_child_policies(db, child, child_ids)
            await db.execute(
                delete(child).where(fk.in_(ids_stmt)).execution_options(synchronize_session=False)
            )


async def delete_with_policies(db: AsyncSession, obj) -> None:
    """Delete ``obj`` and apply its declared child policies. Does not commit."""
    model = type(obj)
    ids_stmt = select(model.id).where(model.id == obj.id)
    await _apply_child_policies(db, model, ids_stmt)
    await db.execute(delete(model).where(model.id == obj.id).execution_options(synchronize_session=False))
    db.expunge(obj)

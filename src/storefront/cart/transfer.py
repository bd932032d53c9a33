"""Cart transfer: folding one user's cart into another user's cart.

The whole read-merge-clear sequence runs in one Unit of Work: the destination
cart is created if needed, every source line is added to it (quantities of a
product already present are summed), and the source cart is emptied. Either
all of that is committed or none of it is.
"""

from dataclasses import dataclass
from enum import Enum

from protean import handle
from protean.exceptions import ObjectNotFoundError
from protean.fields import Identifier
from protean.utils.globals import current_domain

from storefront.atomic import process_atomically
from storefront.cache import CART_VIEW_PATH, revalidate_path
from storefront.cart.cart import Cart, ClearReason, cart_for
from storefront.domain import storefront
from storefront.errors import InvalidOperation, NotFound
from storefront.identity.user import User
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


class TransferOutcome(Enum):
    TRANSFERRED = "Transferred"
    NOTHING_TO_TRANSFER = "Nothing_To_Transfer"


@dataclass(frozen=True)
class TransferResult:
    """What a transfer did. An empty source is a successful no-op, not an error."""

    outcome: TransferOutcome
    items_merged: int = 0
    destination_cart_id: str | None = None

    @property
    def success(self) -> bool:
        return self.outcome == TransferOutcome.TRANSFERRED

    @property
    def message(self) -> str:
        if self.success:
            return f"Transferred {self.items_merged} item(s)"
        return "Source cart is empty"


def _reject_self_transfer(source_user_id, destination_user_id):
    if str(source_user_id) == str(destination_user_id):
        raise InvalidOperation({"destination_user_id": ["Cannot transfer a cart to the same user"]})


@storefront.command(part_of="Cart")
class TransferCart:
    source_user_id = Identifier(required=True)
    destination_user_id = Identifier(required=True)


@storefront.command_handler(part_of=Cart)
class TransferCartHandler:
    @handle(TransferCart)
    def transfer_cart(self, command):
        _reject_self_transfer(command.source_user_id, command.destination_user_id)

        repo = current_domain.repository_for(Cart)
        source = repo.for_user(command.source_user_id)
        if source is None or source.is_empty:
            return TransferResult(outcome=TransferOutcome.NOTHING_TO_TRANSFER)

        try:
            destination_user = current_domain.repository_for(User).get(command.destination_user_id)
        except ObjectNotFoundError as exc:
            raise NotFound({"destination_user_id": [f"User {command.destination_user_id} does not exist"]}) from exc

        destination = cart_for(destination_user)
        merged = destination.absorb(source.lines(), source_cart_id=source.id)
        source.clear(reason=ClearReason.TRANSFERRED)

        repo.add(destination)
        repo.add(source)

        return TransferResult(
            outcome=TransferOutcome.TRANSFERRED,
            items_merged=merged,
            destination_cart_id=str(destination.id),
        )


def transfer_cart(source_user_id, destination_user_id) -> TransferResult:
    """Move every line of the source user's cart into the destination user's cart.

    Raises:
        InvalidOperation: source and destination are the same user.
        NotFound: the destination user does not exist.
        StorageFailure: the transfer could not be committed; nothing changed.
    """
    _reject_self_transfer(source_user_id, destination_user_id)

    result = process_atomically(
        TransferCart(
            source_user_id=str(source_user_id),
            destination_user_id=str(destination_user_id),
        )
    )

    if result.success:
        revalidate_path(CART_VIEW_PATH)
        logger.info(
            "cart_transferred",
            source_user_id=str(source_user_id),
            destination_user_id=str(destination_user_id),
            items_merged=result.items_merged,
        )
    else:
        logger.info(
            "cart_transfer_skipped",
            source_user_id=str(source_user_id),
            destination_user_id=str(destination_user_id),
            reason=result.message,
        )
    return result

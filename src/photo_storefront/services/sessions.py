"""Client session state and its persistence mirror."""

import json
import logging
from collections.abc import Callable
from dataclasses import dataclass, field

from photo_storefront.adapters.local_storage import KeyValueStore
from photo_storefront.domain.session import (
    ANONYMOUS,
    Authenticated,
    SessionState,
    UserProfile,
)
from photo_storefront.services.cart import CART_KEY, CartManager, CorruptCartError

logger = logging.getLogger(__name__)

TOKEN_KEY = "token"
USER_KEY = "user"

SessionListener = Callable[[SessionState], None]


@dataclass
class SessionManager:
    """Owns the session state and keeps the local store in step with it.

    Listeners are called synchronously after every save, restore and clear.
    """

    store: KeyValueStore
    cart_manager: CartManager
    state: SessionState = ANONYMOUS
    listeners: list[SessionListener] = field(default_factory=list)

    @property
    def is_authenticated(self) -> bool:
        return isinstance(self.state, Authenticated)

    def subscribe(self, listener: SessionListener) -> None:
        """Register a callback invoked after every session mutation."""
        self.listeners.append(listener)

    def save_session(self, token: str, user: UserProfile) -> SessionState:
        """Adopt a freshly issued session and mirror it to the store."""
        if not token:
            raise ValueError("Session token must not be empty")
        if not user.name or not user.email:
            raise ValueError("Session user must have a name and an email")
        self.state = Authenticated(token=token, user=user)
        token_saved = self.store.set(TOKEN_KEY, token)
        user_saved = self.store.set(USER_KEY, json.dumps(user.to_payload()))
        if not (token_saved and user_saved):
            logger.warning("Session for user %s will not survive a restart", user.id)
        logger.info("Session saved for %s", user.name)
        self._notify()
        return self.state

    def restore_session(self) -> SessionState:
        """Rebuild the session and cart from the store.

        Only a complete token/user pair is restored. Undecodable user or cart
        payloads are treated as corruption and clear the whole session.
        """
        token = self.store.get(TOKEN_KEY)
        raw_user = self.store.get(USER_KEY)
        if not token or not raw_user:
            self.state = ANONYMOUS
            self._notify()
            return self.state

        try:
            user = UserProfile.from_payload(json.loads(raw_user))
        except ValueError:
            logger.exception("Stored session is corrupt; clearing it")
            return self.clear_session()

        try:
            self.cart_manager.restore()
        except CorruptCartError:
            logger.exception("Stored cart is corrupt; clearing the session")
            return self.clear_session()

        self.state = Authenticated(token=token, user=user)
        logger.info("Session restored for %s", user.name)
        self._notify()
        return self.state

    def clear_session(self) -> SessionState:
        """Forget the session, empty the cart and drop all persisted keys."""
        self.state = ANONYMOUS
        self.cart_manager.reset()
        for key in (TOKEN_KEY, USER_KEY, CART_KEY):
            if not self.store.remove(key):
                logger.warning("Could not remove %s from the local store", key)
        logger.info("Session cleared")
        self._notify()
        return self.state

    def _notify(self) -> None:
        for listener in self.listeners:
            listener(self.state)

"""Application state for BundleUp clients.

``AppState`` bundles the auth session and the cart. ``AppStore`` owns the
current state, applies reducers, notifies subscribers and keeps an undo
history. Create one store at the application's entry point with
``create_store()`` and hand it to whatever needs it.
"""

from dataclasses import dataclass, field, replace
from typing import Any, Callable, Optional

from libs.auth.models import Role
from libs.auth.tokens import TokenPair
from libs.shop_client import cart as cart_ops
from libs.shop_client.cart import CartState

Listener = Callable[["AppState"], None]
Reducer = Callable[..., "AppState"]


@dataclass(frozen=True)
class AuthState:
    user: Optional[dict[str, Any]] = None
    tokens: Optional[TokenPair] = None

    @property
    def is_authenticated(self) -> bool:
        return self.tokens is not None

    @property
    def role(self) -> Optional[Role]:
        if not self.user or not self.user.get("role"):
            return None
        return Role(self.user["role"])


@dataclass(frozen=True)
class AppState:
    auth: AuthState = field(default_factory=AuthState)
    cart: CartState = field(default_factory=CartState)


# ---------------------------------------------------------------------------
# Auth reducers
# ---------------------------------------------------------------------------


def signed_in(state: AppState, user: dict[str, Any], tokens: TokenPair) -> AppState:
    """Record the session and switch the cart to the user's pricing role."""
    auth = AuthState(user=user, tokens=tokens)
    return replace(state, auth=auth, cart=cart_ops.with_role(state.cart, auth.role))


def signed_out(state: AppState) -> AppState:
    return AppState()


def token_refreshed(state: AppState, access_token: str) -> AppState:
    if state.auth.tokens is None:
        return state
    tokens = state.auth.tokens.model_copy(update={"access_token": access_token})
    return replace(state, auth=replace(state.auth, tokens=tokens))


# ---------------------------------------------------------------------------
# Cart reducers lifted onto the app state
# ---------------------------------------------------------------------------


def cart_reducer(fn: Callable[..., CartState]) -> Reducer:
    """Lift a ``CartState`` reducer so it can be dispatched on ``AppState``."""

    def reducer(state: AppState, *args, **kwargs) -> AppState:
        return replace(state, cart=fn(state.cart, *args, **kwargs))

    reducer.__name__ = fn.__name__
    return reducer


add_to_cart = cart_reducer(cart_ops.add_item)
update_cart_quantity = cart_reducer(cart_ops.update_quantity)
remove_from_cart = cart_reducer(cart_ops.remove_item)
clear_cart = cart_reducer(cart_ops.clear)


class AppStore:
    def __init__(self, initial: Optional[AppState] = None, history_limit: int = 50):
        self._state = initial or AppState()
        self._history: list[AppState] = []
        self._history_limit = history_limit
        self._listeners: list[Listener] = []

    @property
    def state(self) -> AppState:
        return self._state

    def dispatch(self, reducer: Reducer, *args, **kwargs) -> AppState:
        """Apply ``reducer`` to the current state.

        If the reducer raises, the state is unchanged and the error
        propagates to the caller.
        """
        new_state = reducer(self._state, *args, **kwargs)
        if new_state is self._state:
            return new_state

        self._history.append(self._state)
        if len(self._history) > self._history_limit:
            self._history.pop(0)
        self._state = new_state
        self._notify()
        return new_state

    def undo(self) -> AppState:
        if self._history:
            self._state = self._history.pop()
            self._notify()
        return self._state

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register ``listener``; call the returned function to unsubscribe."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener(self._state)


def create_store(initial: Optional[AppState] = None) -> AppStore:
    return AppStore(initial)

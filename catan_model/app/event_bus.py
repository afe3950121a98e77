"""Bus d'évènements synchrone pour les observateurs du plateau."""

from __future__ import annotations

from typing import Callable, List, Optional, Tuple, Type

Subscriber = Callable[[object], None]


class EventBus:
    """Publie des évènements aux observateurs enregistrés.

    Chaque publication appelle immédiatement les abonnés dans l'ordre
    d'enregistrement. Un abonné peut filtrer sur un type d'évènement. Une
    exception levée par un abonné interrompt la diffusion; l'état du plateau
    a déjà été modifié à ce moment-là.
    """

    __slots__ = ("_subscribers",)

    def __init__(self) -> None:
        self._subscribers: List[Tuple[Subscriber, Optional[Type[object]]]] = []

    def subscribe(
        self,
        callback: Subscriber,
        event_type: Optional[Type[object]] = None,
    ) -> Callable[[], None]:
        """Enregistre un abonné et retourne une fonction d'unsubscribe."""

        entry = (callback, event_type)
        self._subscribers.append(entry)

        def unsubscribe() -> None:
            try:
                self._subscribers.remove(entry)
            except ValueError:
                # Déjà retiré
                pass

        return unsubscribe

    def publish(self, event: object) -> None:
        """Diffuse l'évènement aux abonnés concernés."""

        for callback, event_type in list(self._subscribers):
            if event_type is None or isinstance(event, event_type):
                callback(event)

    def __len__(self) -> int:
        return len(self._subscribers)

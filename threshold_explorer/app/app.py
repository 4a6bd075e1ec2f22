"""Dash app factory and server-side state."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from typing import List

from ..config import ExplorerSettings
from ..samples import SampleStore
from ..state import ReferenceState
from ..views import DerivedViews, recompute
from ..visualization.colors import StateColorMap

logger = logging.getLogger(__name__)


@dataclass
class ServerState:
    """Mutable server-side state for the single-user Dash app.

    ``store`` is the loaded dataset, ``filtered`` the subset matching the
    state-label filter; every view is recomputed from ``filtered`` and
    ``reference``.
    """

    store: SampleStore
    settings: ExplorerSettings = field(default_factory=ExplorerSettings)
    reference: ReferenceState = field(default_factory=ReferenceState)
    color_map: StateColorMap = field(default_factory=StateColorMap)
    state_filter: List[int] = field(default_factory=list)
    filtered: SampleStore = field(init=False)

    def __post_init__(self) -> None:
        self.filtered = self.store.filter_states(self.state_filter)

    def load(self, store: SampleStore) -> None:
        """Replace the dataset; clears the filter and the reference state."""
        self.store = store
        self.state_filter = []
        self.filtered = store
        self.reference.reset_all()
        logger.info("Loaded dataset with %d samples", len(store))

    def update_filter(self, states: list[int] | None) -> None:
        """Restrict the views to samples whose state is in *states*."""
        self.state_filter = list(states or [])
        self.filtered = self.store.filter_states(self.state_filter)
        logger.debug(
            "State filter %s keeps %d / %d samples",
            self.state_filter or "all", len(self.filtered), len(self.store),
        )

    def views(self) -> DerivedViews:
        return recompute(self.filtered, self.reference, self.settings)


# Module-level singleton, set by create_app()
state: ServerState | None = None


def create_app(
    store: SampleStore | None = None,
    settings: ExplorerSettings | None = None,
) -> "dash.Dash":
    """Create and configure the Dash application.

    Parameters
    ----------
    store : SampleStore, optional
        Dataset to show on start-up.  When omitted the app starts empty and
        waits for an upload.
    settings : ExplorerSettings, optional
        Bucket counts for the derived views.

    Returns
    -------
    dash.Dash
    """
    import dash

    from . import callbacks
    from .layout import build_layout

    global state
    state = ServerState(
        store=store if store is not None else SampleStore.empty(),
        settings=settings or ExplorerSettings(),
    )

    assets_dir = os.path.join(os.path.dirname(os.path.dirname(__file__)), "assets")

    app = dash.Dash(
        __name__,
        assets_folder=assets_dir,
        suppress_callback_exceptions=True,
        title="Threshold Explorer",
    )
    app.layout = build_layout(state)
    callbacks.register(app)

    return app

"""Tests for the Dash app factory, server state and command line."""

import importlib
import logging

import pytest

from threshold_explorer import ExplorerSettings, ThresholdPoint, ZoomBounds
from threshold_explorer.app import ServerState, create_app
from threshold_explorer.logging_config import setup_logging

app_module = importlib.import_module("threshold_explorer.app.app")

EXPECTED_IDS = {
    "upload-data",
    "status-bar",
    "state-filter",
    "threshold-cpm-input",
    "threshold-intensity-input",
    "threshold-clear-btn",
    "metrics-panel",
    "download-btn",
    "download-results",
    "zoom-cpm-input",
    "zoom-intensity-input",
    "zoom-apply-btn",
    "zoom-reset-btn",
    "zoom-message",
    "scatter-graph",
    "cpm-sweep-graph",
    "intensity-sweep-graph",
    "cpm-sweep-title",
    "intensity-sweep-title",
    "figure-trigger",
}


def _component_ids(component):
    ids = set()
    cid = getattr(component, "id", None)
    if cid is not None:
        ids.add(cid)
    children = getattr(component, "children", None)
    if children is None or isinstance(children, str):
        return ids
    if not isinstance(children, (list, tuple)):
        children = [children]
    for child in children:
        ids |= _component_ids(child)
    return ids


# ---------------------------------------------------------------------------
# ServerState
# ---------------------------------------------------------------------------

def test_server_state_filters_by_state(quadrant_store):
    server = ServerState(store=quadrant_store)
    assert server.filtered is quadrant_store

    server.update_filter([1])
    assert list(server.filtered.names) == ["low", "int_only"]

    server.update_filter(None)
    assert len(server.filtered) == 4


def test_server_state_views_use_filtered_store(quadrant_store):
    server = ServerState(store=quadrant_store)
    server.update_filter([1, 3])
    server.reference.set_threshold(ThresholdPoint(cpm=3, intensity=3))

    views = server.views()
    assert views.counts.total == 3
    assert views.counts.fn == 1


def test_loading_a_dataset_resets_everything(quadrant_store, random_store):
    server = ServerState(store=quadrant_store, settings=ExplorerSettings(sweep_buckets=5))
    server.update_filter([2])
    server.reference.set_threshold(ThresholdPoint(cpm=3, intensity=3))
    server.reference.set_zoom(ZoomBounds(cpm=(0, 2), intensity=(0, 2)))

    server.load(random_store)

    assert server.state_filter == []
    assert server.filtered is random_store
    assert server.reference.threshold is None
    assert server.reference.zoom is None
    assert server.settings.sweep_buckets == 5


# ---------------------------------------------------------------------------
# App factory
# ---------------------------------------------------------------------------

def test_create_app_builds_full_layout(quadrant_store):
    app = create_app(quadrant_store)

    assert EXPECTED_IDS <= _component_ids(app.layout)
    assert app_module.state is not None
    assert app_module.state.store is quadrant_store


def test_create_app_without_data_starts_empty():
    app = create_app()

    assert len(app_module.state.store) == 0
    assert "scatter-graph" in _component_ids(app.layout)


def test_create_app_registers_callbacks(quadrant_store):
    app = create_app(quadrant_store)
    assert len(app.callback_map) >= 9


# ---------------------------------------------------------------------------
# Command line and logging
# ---------------------------------------------------------------------------

def test_parser_defaults():
    run_app = importlib.import_module("run_app")
    args = run_app.build_parser().parse_args([])

    assert args.data is None
    assert args.sweep_buckets == 40
    assert args.histogram_buckets == 30
    assert args.port == 8050
    assert not args.drop_invalid


def test_parser_options():
    run_app = importlib.import_module("run_app")
    args = run_app.build_parser().parse_args(
        ["--data", "x.tsv", "--sweep-buckets", "10", "--drop-invalid", "--log-level", "debug"]
    )

    assert args.data == "x.tsv"
    assert args.sweep_buckets == 10
    assert args.drop_invalid
    assert args.log_level == "debug"


def test_main_rejects_bad_bucket_count():
    run_app = importlib.import_module("run_app")
    with pytest.raises(SystemExit):
        run_app.main(["--sweep-buckets", "0"])


def test_setup_logging_writes_file(tmp_path):
    log_file = tmp_path / "explorer.log"
    setup_logging("debug", str(log_file))
    logger = logging.getLogger("threshold_explorer")
    try:
        assert logger.level == logging.DEBUG
        logging.getLogger("threshold_explorer.test").info("hello")
        for handler in logger.handlers:
            handler.flush()
        assert "hello" in log_file.read_text(encoding="utf-8")
    finally:
        for handler in list(logger.handlers):
            handler.close()
        logger.handlers.clear()
        logger.setLevel(logging.NOTSET)


def _outputs_of(app, input_id):
    """Output spec of the callback triggered by *input_id*."""
    for output_spec, callback in app.callback_map.items():
        if any(dep["id"] == input_id for dep in callback["inputs"]):
            return output_spec
    raise AssertionError(f"no callback listens to {input_id}")


@pytest.mark.parametrize(
    "input_id, cleared",
    [
        (
            "upload-data",
            ["threshold-cpm-input", "threshold-intensity-input",
             "zoom-cpm-input", "zoom-intensity-input"],
        ),
        ("threshold-clear-btn", ["threshold-cpm-input", "threshold-intensity-input"]),
        ("zoom-reset-btn", ["zoom-cpm-input", "zoom-intensity-input"]),
    ],
)
def test_resets_clear_typed_inputs(quadrant_store, input_id, cleared):
    app = create_app(quadrant_store)
    outputs = _outputs_of(app, input_id)

    for component_id in cleared:
        assert f"{component_id}.value" in outputs

"""
Structured Log Event Types
==========================

Bounded Context: Observability Event Taxonomy

This module defines typed event names for structured logging.

Design:
- Enum-based (prevents typos, enables autocomplete)
- Hierarchical naming (namespace.category.action)

Event Naming Convention:
    <component>.<category>.<action>

    component: render, scene, input, error
    category: loop, frame, lod, surface
    action: started, drawn, skipped, generated

Example Log Query (jq):
    jq 'select(.event == "render.frame.drawn") | .metadata.render_ms'
"""

from enum import Enum


class LogEvent(str, Enum):
    """
    Typed log event names for structured logging.

    Categories:
    - render.*: Render loop lifecycle and frames
    - scene.*: Scene loading
    - input.*: Camera and tap input
    - error.*: Error conditions
    """

    # ========== Render Loop Events ==========
    RENDER_LOOP_STARTED = "render.loop.started"
    """Render worker thread started."""

    RENDER_LOOP_STOPPED = "render.loop.stopped"
    """Render worker thread exited."""

    RENDER_LOD_GENERATED = "render.lod.generated"
    """LOD models generated for the viewport."""

    RENDER_FRAME_DRAWN = "render.frame.drawn"
    """Frame drawn and submitted to the surface."""

    RENDER_FRAME_SKIPPED = "render.frame.skipped"
    """Surface unavailable, frame skipped."""

    RENDER_SURFACE_RESIZED = "render.surface.resized"
    """Surface size changed (LOD models are kept)."""

    # ========== Scene Events ==========
    SCENE_LOADED = "scene.loaded"
    """Feature collection loaded and normalized."""

    # ========== Input Events ==========
    INPUT_TAP = "input.tap"
    """Tap resolved against the feature list."""

    # ========== Error Events ==========
    FRAME_ERROR = "error.frame"
    """Unexpected failure while drawing a frame."""

    LOOP_ERROR = "error.loop"
    """Render worker aborted."""

    LOAD_WHILE_RUNNING = "error.load_while_running"
    """Scene load attempted while the render loop runs."""


# Event categories for filtering
RENDER_EVENTS = {
    LogEvent.RENDER_LOOP_STARTED,
    LogEvent.RENDER_LOOP_STOPPED,
    LogEvent.RENDER_LOD_GENERATED,
    LogEvent.RENDER_FRAME_DRAWN,
    LogEvent.RENDER_FRAME_SKIPPED,
    LogEvent.RENDER_SURFACE_RESIZED,
}

ERROR_EVENTS = {
    LogEvent.FRAME_ERROR,
    LogEvent.LOOP_ERROR,
    LogEvent.LOAD_WHILE_RUNNING,
}

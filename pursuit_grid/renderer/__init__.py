"""Rendering subpackage.

Turns :class:`pursuit_grid.snapshot.Snapshot` frames into something a host can
show:

* :mod:`pursuit_grid.renderer.text` draws the ASCII frame with the
    console glyphs plus a HUD line.
* :mod:`pursuit_grid.renderer.texture` paints a Pillow RGBA image (used by the
    Streamlit app and the Gymnasium observation).

Renderers only read snapshots; they never touch ``State`` directly.
"""

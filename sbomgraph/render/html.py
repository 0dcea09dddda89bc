"""Standalone HTML page around the SVG diagram, with pan and zoom."""

from __future__ import annotations

import html

_XML_DECL = '<?xml version="1.0" encoding="UTF-8"?>'

_SCRIPT = """  <script>
    (function () {
      const viewportEl = document.getElementById('viewport');
      const svg = viewportEl.querySelector('svg');
      if (!svg) return;
      if (!svg.getAttribute('viewBox')) {
        const w = svg.getAttribute('width') || 1000;
        const h = svg.getAttribute('height') || 800;
        svg.setAttribute('viewBox', `0 0 ${w} ${h}`);
      }
      svg.removeAttribute('width');
      svg.removeAttribute('height');

      const vb = svg.viewBox.baseVal;
      const initial = { x: vb.x, y: vb.y, width: vb.width, height: vb.height };

      const zoomAt = (clientX, clientY, factor) => {
        const rect = svg.getBoundingClientRect();
        const px = (clientX - rect.left) / rect.width;
        const py = (clientY - rect.top) / rect.height;
        const newW = Math.max(initial.width * 0.05, Math.min(initial.width * 4, vb.width / factor));
        const newH = newW * (initial.height / initial.width);
        vb.x += (vb.width - newW) * px;
        vb.y += (vb.height - newH) * py;
        vb.width = newW;
        vb.height = newH;
      };

      let panning = false;
      let start = { x: 0, y: 0, vbX: 0, vbY: 0 };
      svg.addEventListener('pointerdown', (e) => {
        panning = true;
        svg.setPointerCapture(e.pointerId);
        start = { x: e.clientX, y: e.clientY, vbX: vb.x, vbY: vb.y };
      });
      svg.addEventListener('pointerup', () => { panning = false; });
      svg.addEventListener('pointercancel', () => { panning = false; });
      svg.addEventListener('pointermove', (e) => {
        if (!panning) return;
        const rect = svg.getBoundingClientRect();
        vb.x = start.vbX - (e.clientX - start.x) * (vb.width / rect.width);
        vb.y = start.vbY - (e.clientY - start.y) * (vb.height / rect.height);
      });
      svg.addEventListener('wheel', (e) => {
        e.preventDefault();
        zoomAt(e.clientX, e.clientY, e.deltaY > 0 ? 1 / 1.15 : 1.15);
      }, { passive: false });

      document.getElementById('resetBtn')?.addEventListener('click', () => {
        vb.x = initial.x;
        vb.y = initial.y;
        vb.width = initial.width;
        vb.height = initial.height;
      });
    })();
  </script>
"""


def wrap_html(svg: str, *, title: str) -> str:
    """Embed a rendered diagram in a page that can be opened directly in a browser."""
    t = html.escape(title, quote=True)
    body = svg.replace(_XML_DECL, "", 1).strip()
    return (
        "<!doctype html>\n"
        "<html>\n"
        "<head>\n"
        f"  <meta charset=\"utf-8\" />\n  <title>{t}</title>\n"
        "  <meta name=\"viewport\" content=\"width=device-width, initial-scale=1\" />\n"
        "  <style>\n"
        "    html, body { height: 100%; margin: 0; }\n"
        "    body { background: #0d1117; color: #e6edf3; font-family: system-ui, -apple-system, Segoe UI, Roboto, sans-serif; }\n"
        "    .wrap { padding: 12px; height: 100vh; box-sizing: border-box; display: flex; flex-direction: column; }\n"
        "    .toolbar { display: flex; gap: 8px; align-items: center; margin-bottom: 10px; }\n"
        "    .btn { background: #161b22; color: #e6edf3; border: 1px solid #30363d; border-radius: 6px; padding: 6px 10px; cursor: pointer; }\n"
        "    .hint { color: #8b949e; font-size: 12px; }\n"
        "    .viewport { border: 1px solid #30363d; border-radius: 8px; overflow: hidden; flex: 1; min-height: 0; }\n"
        "    svg { width: 100%; height: 100%; display: block; touch-action: none; user-select: none; }\n"
        "  </style>\n"
        "</head>\n"
        "<body>\n"
        "  <div class=\"wrap\">\n"
        "    <div class=\"toolbar\">\n"
        "      <button class=\"btn\" id=\"resetBtn\" type=\"button\">Reset</button>\n"
        "      <span class=\"hint\">Drag to pan, scroll to zoom, hover a node for details</span>\n"
        "    </div>\n"
        "    <div class=\"viewport\" id=\"viewport\">\n"
        f"{body}\n"
        "    </div>\n"
        "  </div>\n"
        f"{_SCRIPT}"
        "</body>\n"
        "</html>\n"
    )

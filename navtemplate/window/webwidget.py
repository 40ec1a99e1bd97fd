# navtemplate/window/webwidget.py
"""
A desktop preview of a widget tree in a Qt WebEngine view.

Clicks on elements tagged with ``data-widget-id`` are sent back over a
QWebChannel and dispatched as taps; every committed state change re-renders
the page body.
"""
import json
import logging
import sys
from typing import Optional

from PySide6.QtCore import QObject, Slot
from PySide6.QtWebChannel import QWebChannel
from PySide6.QtWebEngineWidgets import QWebEngineView
from PySide6.QtWidgets import QApplication

from ..bottom_menu import ViewWithBottomMenu
from ..state import State
from ..widgets import CSS_RULES

logger = logging.getLogger(__name__)

MENU_CSS = """
html, body { margin: 0; height: 100%; background: #0f0f10; color: #f2f2f7; }
#root { height: 100%; }
.nt-menu-page { position: absolute; inset: 0; overflow: auto; padding: 16px; }
.nt-bottom-menu { position: absolute; left: 0; right: 0; bottom: 0; padding: 0 15px 20px 15px;
                  border-radius: 20px; backdrop-filter: blur(10px);
                  box-shadow: inset 0 1px 0 rgba(255, 255, 255, 0.35); }
.nt-bottom-menu > .nt-row { height: 100%; }
.nt-menu-button { width: 50px; height: 50px; cursor: pointer; }
.nt-menu-button .nt-stack { display: flex; align-items: center; justify-content: center; }
.nt-menu-glow { position: absolute; inset: 0; }
.nt-icon::before { content: attr(data-symbol); font-size: 9px; }
"""

PAGE_TEMPLATE = """<!DOCTYPE html>
<html>
<head>
<meta charset="utf-8">
<style>{css}</style>
<script src="qrc:///qtwebchannel/qwebchannel.js"></script>
</head>
<body>
<div id="root">{body}</div>
<script>
new QWebChannel(qt.webChannelTransport, function (channel) {{
    window.api = channel.objects.api;
}});
document.addEventListener("click", function (event) {{
    var target = event.target.closest("[data-widget-id]");
    if (target && window.api) {{
        window.api.on_tap(target.getAttribute("data-widget-id"));
    }}
}});
</script>
</body>
</html>
"""


class Api(QObject):
    """Bridge object exposed to the page as ``api``."""
    def __init__(self, root: ViewWithBottomMenu):
        super().__init__()
        self.root = root

    @Slot(str, result=bool)
    def on_tap(self, widget_id):
        fired = self.root.dispatch_tap(widget_id)
        if not fired:
            logger.debug("Tap on %s did not match a gesture", widget_id)
        return fired


class WebWindow(QWebEngineView):
    def __init__(self, root: ViewWithBottomMenu, title: str = "NavTemplate",
                 width: int = 420, height: int = 820):
        super().__init__()
        self.root = root
        self.setWindowTitle(title)
        self.resize(width, height)

        self.api = Api(root)
        self.channel = QWebChannel()
        self.channel.registerObject("api", self.api)
        self.page().setWebChannel(self.channel)

        root.get_state().add_listener(self._on_commit)
        self.setHtml(self.page_html())

    def page_html(self) -> str:
        classes = self.root.get_required_css_classes()
        css = "\n".join(rule for name, rule in CSS_RULES.items() if name in classes)
        return PAGE_TEMPLATE.format(css=css + MENU_CSS, body=self.root.render())

    def _on_commit(self, state: State):
        script = f"document.getElementById('root').innerHTML = {json.dumps(self.root.render())};"
        self.page().runJavaScript(script)

    def closeEvent(self, event):
        self.root.get_state().remove_listener(self._on_commit)
        super().closeEvent(event)


def run_preview(root: ViewWithBottomMenu, title: str = "NavTemplate") -> int:
    """Show ``root`` in a window and run the Qt event loop until it closes."""
    app: Optional[QApplication] = QApplication.instance() or QApplication(sys.argv)
    window = WebWindow(root, title=title)
    window.show()
    logger.info("Preview window opened")
    code = app.exec()
    root.dispose()
    return code

import os

import pytest

pytest.importorskip("PySide6")
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from PySide6.QtCore import Qt  # noqa: E402
from PySide6.QtWidgets import QApplication, QMainWindow, QPlainTextEdit, QToolBar  # noqa: E402

from frame_registry.encoders import encode_geometry  # noqa: E402
from frame_registry.qt_host import QtWindowHost  # noqa: E402


@pytest.fixture(scope="module")
def qapp():
    app = QApplication.instance() or QApplication([])
    yield app


@pytest.fixture
def window(qapp):
    win = QMainWindow()
    win.resize(640, 480)
    win.move(12, 34)
    win.setCentralWidget(QPlainTextEdit())
    win.addToolBar("Main")
    win.menuBar().addMenu("File")
    yield win
    win.deleteLater()


def test_geometry_parameters_come_from_window(window) -> None:
    host = QtWindowHost(window)
    assert host.frame_parameter("width") == 640
    assert host.frame_parameter("height") == 480
    assert encode_geometry(host) == "640x480+12+34"


def test_bar_visibility(window) -> None:
    host = QtWindowHost(window)
    assert host.global_value("tool-bar-mode") is True
    assert host.global_value("menu-bar-mode") is True

    for bar in window.findChildren(QToolBar):
        bar.hide()
    window.menuBar().hide()
    assert host.global_value("tool-bar-mode") is False
    assert host.global_value("menu-bar-mode") is False


def test_scroll_bar_parameters(window) -> None:
    host = QtWindowHost(window)
    assert host.frame_parameter("vertical-scroll-bars") == "right"
    assert host.frame_parameter("scroll-bar-width") > 0

    window.centralWidget().setVerticalScrollBarPolicy(Qt.ScrollBarPolicy.ScrollBarAlwaysOff)
    assert host.frame_parameter("vertical-scroll-bars") is None


def test_explicit_values_override_and_unknown_names_fail(window) -> None:
    host = QtWindowHost(window, globals={"line-spacing": 3}, parameters={"width": 1})
    assert host.global_value("line-spacing") == 3
    assert host.frame_parameter("width") == 1
    with pytest.raises(KeyError):
        host.global_value("no-such-setting")

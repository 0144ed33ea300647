import os

import pytest

# 无显示环境下运行 Qt 测试
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")


@pytest.fixture(scope="session")
def qapp():
    QtWidgets = pytest.importorskip("PyQt5.QtWidgets")
    app = QtWidgets.QApplication.instance() or QtWidgets.QApplication([])
    yield app


@pytest.fixture
def log_text():
    return "error disk full\n\nwarning disk slow\nerror net down\n"

"""业务包注册中心的选择逻辑。"""

import pytest

from app.packages import get_active_package


def test_default_package_is_physical_storage(monkeypatch):
    monkeypatch.delenv("APP_ACTIVE_PACKAGE", raising=False)

    package = get_active_package()

    assert package.name == "physical_storage"
    assert package.startup_hooks


def test_environment_selects_package(monkeypatch):
    monkeypatch.setenv("APP_ACTIVE_PACKAGE", "physical_storage")

    assert get_active_package().name == "physical_storage"


def test_unknown_package_is_rejected(monkeypatch):
    monkeypatch.setenv("APP_ACTIVE_PACKAGE", "system")

    with pytest.raises(RuntimeError, match="Unknown application package 'system'"):
        get_active_package()

    with pytest.raises(RuntimeError):
        get_active_package("reports")

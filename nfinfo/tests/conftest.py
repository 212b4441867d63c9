from __future__ import annotations

from datetime import UTC, datetime, timedelta

import pytest

from nfinfo.host import Host
from nfinfo.version import APP_TIMESTAMP


class FakeHost(Host):
    """Host with fixed values so reports are reproducible."""

    def __init__(
        self,
        *,
        env: dict[str, str] | None = None,
        props: dict[str, str] | None = None,
        args: list[str] | None = None,
        providers: list[str] | None = None,
        address: str | None = "192.168.1.5",
    ) -> None:
        self._env = env if env is not None else {"NXF_HOME": "/opt/nxf", "HOME": "/home/me"}
        self._props = (
            props
            if props is not None
            else {
                "os.name": "Linux",
                "line.separator": "\n",
                "sys.path": "/usr/lib/python3:/site",
            }
        )
        self._args = args if args is not None else []
        self._providers = providers if providers is not None else ["file", "s3"]
        self._address = address

    def os_name(self) -> str:
        return "Linux"

    def os_version(self) -> str:
        return "6.1.0"

    def runtime_version(self) -> str:
        return "3.12.3"

    def vm_name(self) -> str:
        return "CPython"

    def vm_version(self) -> str:
        return "3.12.3"

    def default_encoding(self) -> str:
        return "UTF-8"

    def native_encoding(self) -> str:
        return "utf-8"

    def process_name(self) -> str:
        return "4242@box"

    def local_address(self) -> str | None:
        return self._address

    def providers(self) -> list[str]:
        return list(self._providers)

    def args(self) -> list[str]:
        return list(self._args)

    def env(self) -> dict[str, str]:
        return dict(self._env)

    def properties(self) -> dict[str, str]:
        return dict(self._props)

    def now(self) -> datetime:
        return datetime.fromtimestamp(APP_TIMESTAMP / 1000, tz=UTC) + timedelta(days=3, hours=5)


@pytest.fixture
def make_host():
    return FakeHost


@pytest.fixture
def host() -> FakeHost:
    return FakeHost()

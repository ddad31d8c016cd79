from __future__ import annotations

import lzma
from pathlib import Path
from types import SimpleNamespace

import pytest
import requests

from raw_schematic.__main__ import EXIT_CANCELLED, build_parser, main
from raw_schematic.common import DownloadCancelled
from raw_schematic.download import service

_SCHEMATIC_ID = "376567988ad370138ad8b2698212367b8edcb69b5fd68c80be1f2ec7d603b4ba"


def _seed_cache(cache_dir: Path, artifact: bytes, talos_version: str = "v1.10.6") -> Path:
    cache_dir.mkdir(parents=True, exist_ok=True)
    path = cache_dir / f"{talos_version}-initramfs-amd64-{_SCHEMATIC_ID}.xz"
    path.write_bytes(artifact)
    return path


def _fail_on_network(monkeypatch: pytest.MonkeyPatch) -> None:
    def _get(*_args: object, **_kwargs: object) -> None:
        raise AssertionError("network access is not expected")

    monkeypatch.setattr(service, "requests", SimpleNamespace(get=_get, RequestException=requests.RequestException))


def test_cli_parser_requires_schematic_id() -> None:
    parser = build_parser()
    args = parser.parse_args(["abc", "--talos-version", "v1.11.0", "--timeout", "5"])

    assert args.schematic_id == "abc"
    assert args.talos_version == "v1.11.0"
    assert args.timeout == 5.0


def test_cli_without_schematic_id_exits_with_usage_error() -> None:
    with pytest.raises(SystemExit) as exc:
        main([])

    assert exc.value.code == 2


def test_cli_prints_raw_schematic_from_cached_artifact(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
    newc_archive,
    extensions_yaml,
) -> None:
    _fail_on_network(monkeypatch)
    raw = "customization:\n  extraKernelArgs:\n    - console=ttyS0\n"
    _seed_cache(
        tmp_path,
        lzma.compress(newc_archive([("extensions.yaml", extensions_yaml("first", raw))]), format=lzma.FORMAT_XZ),
    )

    code = main([_SCHEMATIC_ID, "--cache-dir", str(tmp_path)])

    assert code == 0
    assert capsys.readouterr().out == raw + "\n"


def test_cli_uses_talos_version_in_cache_name(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
    newc_archive,
    extensions_yaml,
) -> None:
    _fail_on_network(monkeypatch)
    _seed_cache(tmp_path, newc_archive([("extensions.yaml", extensions_yaml("v11"))]), talos_version="v1.11.0")

    code = main([_SCHEMATIC_ID, "--cache-dir", str(tmp_path), "--talos-version", "v1.11.0"])

    assert code == 0
    assert capsys.readouterr().out.strip() == "v11"


def test_cli_returns_error_when_member_missing(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
    newc_archive,
) -> None:
    _fail_on_network(monkeypatch)
    _seed_cache(tmp_path, newc_archive([("init", b"#!/bin/sh\n")]))

    assert main([_SCHEMATIC_ID, "--cache-dir", str(tmp_path)]) == 1


def test_cli_rejects_invalid_schematic_id(tmp_path: Path) -> None:
    assert main(["../escape", "--cache-dir", str(tmp_path)]) == 1


def test_cli_returns_error_on_download_failure(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    def _get(*_args: object, **_kwargs: object) -> None:
        raise requests.ConnectionError("connection refused")

    monkeypatch.setattr(service, "requests", SimpleNamespace(get=_get, RequestException=requests.RequestException))

    assert main([_SCHEMATIC_ID, "--cache-dir", str(tmp_path)]) == 1
    assert list(tmp_path.iterdir()) == []


def test_cli_maps_cancellation_to_exit_code(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    def _get(*_args: object, **_kwargs: object) -> None:
        raise DownloadCancelled("download cancelled")

    monkeypatch.setattr(service, "requests", SimpleNamespace(get=_get, RequestException=requests.RequestException))

    assert main([_SCHEMATIC_ID, "--cache-dir", str(tmp_path)]) == EXIT_CANCELLED

import pytest

from simple_api import cli
from simple_api.infrastructure.memory_store import InMemoryUserRepository


@pytest.fixture
def shared_repo(monkeypatch):
    """One in-memory gateway across CLI invocations."""
    repo = InMemoryUserRepository()
    monkeypatch.setattr(cli, "build_user_repository", lambda settings: (repo, None))
    return repo


def test_default_command_is_serve() -> None:
    args = cli._parse_args([])
    assert args.command == "serve"


def test_main_without_verb_starts_server(monkeypatch) -> None:
    calls = []

    def _fake_serve(settings, host, port):
        calls.append((host, port))
        return 0

    monkeypatch.setattr(cli, "_serve", _fake_serve)
    assert cli.main([]) == 0
    assert calls == [(None, None)]


def test_serve_accepts_host_and_port() -> None:
    args = cli._parse_args(["serve", "--host", "127.0.0.1", "--port", "8080"])
    assert args.command == "serve"
    assert args.host == "127.0.0.1"
    assert args.port == 8080


def test_unknown_verb_is_rejected() -> None:
    with pytest.raises(SystemExit) as exc:
        cli._parse_args(["drop"])
    assert exc.value.code == 2


def test_seed_count_clear_reseed(shared_repo, capsys) -> None:
    assert cli.main(["seed"]) == 0
    assert "Seeded 8 users" in capsys.readouterr().out

    assert cli.main(["seed"]) == 0
    assert "Seeded 0 users" in capsys.readouterr().out

    assert cli.main(["count"]) == 0
    assert "Current user count: 8" in capsys.readouterr().out

    assert cli.main(["clear"]) == 0
    assert "Deleted 8 users" in capsys.readouterr().out

    assert cli.main(["reseed"]) == 0
    assert "Reseeded 8 users" in capsys.readouterr().out


def test_storage_failure_exits_nonzero(monkeypatch, capsys) -> None:
    from simple_api.core.errors import StorageUnavailableError

    class _Down(InMemoryUserRepository):
        async def count(self):
            raise StorageUnavailableError("count")

    monkeypatch.setattr(cli, "build_user_repository", lambda settings: (_Down(), None))
    assert cli.main(["count"]) == 1
    assert "Storage is temporarily unavailable" in capsys.readouterr().err


def test_serve_runs_uvicorn_with_configured_port(monkeypatch) -> None:
    calls = {}

    def _fake_run(app, host, port, log_level):
        calls.update(host=host, port=port)

    monkeypatch.setattr("uvicorn.run", _fake_run)
    assert cli.main(["serve", "--port", "9999"]) == 0
    assert calls["port"] == 9999

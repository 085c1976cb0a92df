"""Tests for ``dotfiles.bootstrap.linker``."""

import os
from pathlib import Path

import dotfiles.bootstrap.console_helpers as ch
from dotfiles.bootstrap.linker import LinkSpec, default_link_specs, link, link_dotfiles
from dotfiles.bootstrap.pipeline.status import StepStatus
from dotfiles.bootstrap.ui.prompts import AssumePrompts, InteractivePrompts


def _snapshot(root: Path) -> dict:
    """Map every path under ``root`` to what it is (link target or content)."""
    state = {}
    for dirpath, dirnames, filenames in os.walk(root):
        for name in dirnames + filenames:
            path = Path(dirpath) / name
            rel = path.relative_to(root).as_posix()
            if path.is_symlink():
                state[rel] = ("link", os.readlink(path))
            elif path.is_dir():
                state[rel] = ("dir",)
            else:
                state[rel] = ("file", path.read_text())
    return state


def test_zshrc_is_linked_into_empty_home(repo, home):
    result = link(repo / "home" / ".zshrc", home / ".zshrc")

    assert result.status is StepStatus.OK
    assert (home / ".zshrc").is_symlink()
    assert os.readlink(home / ".zshrc") == str(repo / "home" / ".zshrc")


def test_existing_regular_file_is_replaced(repo, home):
    (home / ".zshrc").write_text("old contents\n")

    result = link(repo / "home" / ".zshrc", home / ".zshrc")

    assert result.status is StepStatus.OK
    assert (home / ".zshrc").is_symlink()
    assert (home / ".zshrc").read_text() == "export EDITOR=nvim\n"


def test_symlink_pointing_elsewhere_is_replaced(repo, home, tmp_path):
    elsewhere = tmp_path / "elsewhere"
    elsewhere.write_text("x")
    (home / ".zshrc").symlink_to(elsewhere)

    link(repo / "home" / ".zshrc", home / ".zshrc")

    assert os.readlink(home / ".zshrc") == str(repo / "home" / ".zshrc")
    assert elsewhere.read_text() == "x"


def test_missing_source_creates_nothing(repo, home):
    result = link(repo / "home" / ".absent", home / ".absent")

    assert result.status is StepStatus.SKIPPED
    assert not os.path.lexists(home / ".absent")


def test_parent_directories_are_created(repo, home):
    destination = home / ".config" / "nvim"

    result = link(repo / "config" / "nvim", destination)

    assert result.status is StepStatus.OK
    assert (home / ".config").is_dir()
    assert (destination / "init.lua").read_text() == "vim.o.number = true\n"


def test_correct_link_is_left_alone(repo, home):
    (home / ".zshrc").symlink_to(repo / "home" / ".zshrc")
    before = os.lstat(home / ".zshrc").st_ino

    result = link(repo / "home" / ".zshrc", home / ".zshrc")

    assert result.status is StepStatus.SKIPPED
    assert os.lstat(home / ".zshrc").st_ino == before


def test_real_directory_destination_fails_without_touching_it(repo, home):
    (home / ".config" / "nvim").mkdir(parents=True)
    (home / ".config" / "nvim" / "mine.lua").write_text("keep me")

    result = link(repo / "config" / "nvim", home / ".config" / "nvim")

    assert result.status is StepStatus.FAILED
    assert "directory" in result.detail
    assert (home / ".config" / "nvim" / "mine.lua").read_text() == "keep me"
    leftovers = [p for p in (home / ".config").iterdir() if "dotfiles-" in p.name]
    assert leftovers == []


def test_dry_run_touches_nothing(repo, home):
    result = link(repo / "home" / ".zshrc", home / ".zshrc", dry_run=True)

    assert result.status is StepStatus.OK
    assert "would link" in result.detail
    assert list(home.iterdir()) == []


def test_default_specs_start_with_zshrc_and_include_config_dirs():
    specs = default_link_specs()

    assert specs[0].destination == Path(".zshrc")
    destinations = {s.destination.as_posix() for s in specs}
    assert ".config/nvim" in destinations
    assert ".config/lsd" in destinations
    gated = [s for s in specs if s.prompt]
    assert [s.destination.as_posix() for s in gated] == [".ssh/config"]


def test_linking_twice_leaves_the_same_filesystem(make_ctx, home):
    ctx = make_ctx(prompts=AssumePrompts(True))

    first_results = link_dotfiles(ctx)
    first = _snapshot(home)
    second_results = link_dotfiles(ctx)
    second = _snapshot(home)

    assert first == second
    assert all(r.status is not StepStatus.FAILED for r in first_results)
    assert all(r.status is not StepStatus.FAILED for r in second_results)
    assert first[".zshrc"][0] == "link"
    assert first[".gitconfig"][0] == "link"
    assert first[".ssh/config"][0] == "link"
    # sources absent from the repository are not created
    assert ".config/ghostty" not in first
    assert ".config/lsd" not in first


def test_gitconfig_step_follows_zshrc(make_ctx):
    names = [r.name for r in link_dotfiles(make_ctx())]

    assert names[:2] == ["link ~/.zshrc", "link ~/.gitconfig"]


def test_declined_ssh_config_is_left_unmodified(make_ctx, home):
    (home / ".ssh").mkdir()
    (home / ".ssh" / "config").write_text("Host personal\n")

    results = link_dotfiles(make_ctx(prompts=AssumePrompts(False)))

    by_name = {r.name: r for r in results}
    assert by_name["link ~/.ssh/config"].status is StepStatus.SKIPPED
    assert not (home / ".ssh" / "config").is_symlink()
    assert (home / ".ssh" / "config").read_text() == "Host personal\n"
    assert (home / ".zshrc").is_symlink()


def test_empty_answer_declines_gated_links(make_ctx, home, monkeypatch):
    monkeypatch.setattr(ch, "stdin_is_tty", lambda: False)
    monkeypatch.setattr("builtins.input", lambda _prompt="": "")

    results = link_dotfiles(make_ctx(prompts=InteractivePrompts()))

    by_name = {r.name: r for r in results}
    assert by_name["link ~/.gitconfig"].status is StepStatus.SKIPPED
    assert by_name["link ~/.ssh/config"].status is StepStatus.SKIPPED
    assert not os.path.lexists(home / ".gitconfig")
    assert not os.path.lexists(home / ".ssh" / "config")


def test_gated_spec_without_source_does_not_prompt(make_ctx, tmp_path):
    class _Refuse:
        def confirm(self, prompt):
            raise AssertionError("should not prompt")

        def ask_text(self, prompt, default=""):
            raise AssertionError("should not prompt")

    empty_repo = tmp_path / "empty"
    empty_repo.mkdir()
    specs = [LinkSpec(Path("home/.ssh/config"), Path(".ssh/config"), "Apply?")]

    results = link_dotfiles(
        make_ctx(prompts=_Refuse(), dotfiles_dir=empty_repo), specs
    )

    assert [r.status for r in results] == [StepStatus.SKIPPED, StepStatus.SKIPPED]


def test_shipped_tree_provides_every_declared_source():
    from dotfiles import config as _config

    missing = [
        spec.source.as_posix()
        for spec in default_link_specs()
        if not (_config.PROJECT_ROOT / spec.source).exists()
    ]

    assert missing == []
    assert (_config.PROJECT_ROOT / _config.GITCONFIG_TEMPLATE).is_file()

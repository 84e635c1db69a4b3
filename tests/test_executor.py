from typing import Any

from folioshell.builder import experience_file_name, format_experience_record
from folioshell.executor import EXIT_NOT_FOUND, CommandExecutor, detect_file_type
from folioshell.models import (
    CommandName,
    ExecutionResult,
    ExperienceEntry,
    OutputKind,
    directory_node,
    file_node,
)
from folioshell.parser import parse
from folioshell.vfs import FsErrorKind, Result, VirtualFileSystem


def _run(executor: CommandExecutor, vfs: VirtualFileSystem, raw: str) -> ExecutionResult:
    return executor.execute(parse(raw), vfs)


def _texts(result: ExecutionResult) -> list[str]:
    return [line.text for line in result.output]


def test_empty_command_does_nothing(executor: CommandExecutor, vfs: VirtualFileSystem) -> None:
    result = _run(executor, vfs, "   ")
    assert result.output == ()
    assert result.exit_code == 0


def test_unknown_command(executor: CommandExecutor, vfs: VirtualFileSystem) -> None:
    result = _run(executor, vfs, "foobar --x")
    assert result.exit_code == EXIT_NOT_FOUND
    assert result.error == "Command not found"
    assert [(line.kind, line.text) for line in result.output] == [
        (OutputKind.ERROR, "bash: foobar: command not found"),
        (OutputKind.INFO, "Type 'help' to see available commands"),
    ]


def test_every_command_has_a_handler(executor: CommandExecutor) -> None:
    assert sorted(executor.available_commands()) == sorted(str(name) for name in CommandName)


def test_echo_joins_arguments(executor: CommandExecutor, vfs: VirtualFileSystem) -> None:
    assert _texts(_run(executor, vfs, 'echo "hello world"')) == ["hello world"]
    assert _texts(_run(executor, vfs, "echo -1 -2.5")) == ["-1 -2.5"]
    assert _texts(_run(executor, vfs, "echo")) == [""]


def test_ls_sorts_directories_first(executor: CommandExecutor, vfs: VirtualFileSystem) -> None:
    result = _run(executor, vfs, "ls -la")
    assert result.exit_code == 0
    assert _texts(result) == [
        ".secrets/",
        "contact/",
        "experience/",
        "projects/",
        "skills/",
        "README.md",
        "about.txt",
    ]
    first = result.output[0]
    assert first.metadata is not None
    assert first.metadata["is_directory"] is True
    last = result.output[-1]
    assert last.metadata is not None
    assert last.metadata["is_directory"] is False


def test_ls_empty_directory(executor: CommandExecutor) -> None:
    vfs = VirtualFileSystem(directory_node("/", [directory_node("empty")]))
    result = _run(executor, vfs, "ls empty")
    assert result.output == ()
    assert result.exit_code == 0


def test_ls_errors(executor: CommandExecutor, vfs: VirtualFileSystem) -> None:
    missing = _run(executor, vfs, "ls nope")
    assert missing.exit_code == 1
    assert _texts(missing) == ["ls: cannot access 'nope': No such file or directory"]
    on_file = _run(executor, vfs, "ls about.txt")
    assert _texts(on_file) == ["ls: about.txt: Not a directory"]


def test_cd_and_pwd(executor: CommandExecutor, vfs: VirtualFileSystem) -> None:
    result = _run(executor, vfs, "cd experience")
    assert result.output == ()
    assert result.exit_code == 0
    assert _texts(_run(executor, vfs, "pwd")) == ["/experience"]
    _run(executor, vfs, "cd ..")
    assert _texts(_run(executor, vfs, "pwd")) == ["/"]


def test_cd_without_argument_goes_home(executor: CommandExecutor, vfs: VirtualFileSystem) -> None:
    _run(executor, vfs, "cd projects")
    assert _run(executor, vfs, "cd").exit_code == 0
    assert vfs.get_current_directory() == "/"


def test_cd_errors(executor: CommandExecutor, vfs: VirtualFileSystem) -> None:
    missing = _run(executor, vfs, "cd nowhere")
    assert missing.exit_code == 1
    assert _texts(missing) == ["cd: nowhere: No such file or directory"]
    assert _texts(_run(executor, vfs, "cd about.txt")) == ["cd: about.txt: Not a directory"]


def test_cat_file_lines_and_metadata(executor: CommandExecutor, vfs: VirtualFileSystem) -> None:
    result = _run(executor, vfs, "cat projects/demo.md")
    assert _texts(result) == ["# Demo", "", "A demo project."]
    metadata = result.output[0].metadata
    assert metadata is not None
    assert metadata["file_type"] == "md"
    assert metadata["syntax_highlight"] is True

    plain = _run(executor, vfs, "cat about.txt")
    assert plain.output[0].metadata is not None
    assert plain.output[0].metadata["syntax_highlight"] is False


def test_cat_errors(executor: CommandExecutor, vfs: VirtualFileSystem) -> None:
    missing_operand = _run(executor, vfs, "cat")
    assert missing_operand.exit_code == 1
    assert missing_operand.error == "Missing file operand"
    assert _texts(missing_operand) == ["cat: missing file operand"]

    directory = _run(executor, vfs, "cat projects")
    assert directory.exit_code == 1
    assert _texts(directory) == ["cat: projects: Is a directory"]

    missing = _run(executor, vfs, "cat nonexistent.txt")
    assert _texts(missing) == ["cat: nonexistent.txt: No such file or directory"]


def test_detect_file_type() -> None:
    assert detect_file_type("a/b.json") == "json"
    assert detect_file_type("README.MD") == "md"
    assert detect_file_type("notes.txt") == "txt"
    assert detect_file_type("Makefile") == "txt"


def test_help_overview_and_topic(executor: CommandExecutor, vfs: VirtualFileSystem) -> None:
    overview = _texts(_run(executor, vfs, "help"))
    assert overview[0] == "Available Commands:"
    assert "Navigation:" in overview
    assert any(line.strip().startswith("cd <directory>") for line in overview)

    topic = _run(executor, vfs, "help cd")
    assert _texts(topic)[0] == "cd <directory> - Change directory"


def test_help_unknown_topic(executor: CommandExecutor, vfs: VirtualFileSystem) -> None:
    result = _run(executor, vfs, "help frobnicate")
    assert result.exit_code == 1
    assert result.output[0].kind is OutputKind.ERROR
    assert result.output[0].text == "No help available for: frobnicate"


def test_clear_signals_without_state_change(executor: CommandExecutor, vfs: VirtualFileSystem) -> None:
    _run(executor, vfs, "cd projects")
    result = _run(executor, vfs, "clear")
    assert len(result.output) == 1
    assert result.output[0].kind is OutputKind.INFO
    assert dict(result.output[0].metadata or {}) == {"clear_screen": True}
    assert vfs.get_current_directory() == "/projects"


def test_exit_and_gui(executor: CommandExecutor, vfs: VirtualFileSystem) -> None:
    for name in ["exit", "gui"]:
        result = _run(executor, vfs, name)
        assert result.exit_code == 0
        assert result.output[0].text == "Returning to GUI view..."
        assert dict(result.output[0].metadata or {}) == {"exit_session": True}
    assert vfs.get_current_directory() == "/"


def test_whoami_uses_identity(executor: CommandExecutor, vfs: VirtualFileSystem) -> None:
    lines = _texts(_run(executor, vfs, "whoami"))
    assert "Name: Jane Doe" in lines
    assert "Location: Remote" in lines
    assert "  • Shells" in lines


def test_date_uses_clock(executor: CommandExecutor, vfs: VirtualFileSystem) -> None:
    assert _texts(_run(executor, vfs, "date")) == ["Tue, Mar 05, 2024, 02:07:09 PM IST"]


def test_neofetch_places_info_beside_banner(executor: CommandExecutor, vfs: VirtualFileSystem) -> None:
    lines = _texts(_run(executor, vfs, "neofetch"))
    assert any(line.endswith("jane@portfolio") for line in lines)
    assert any("Specialization: Compilers, Shells" in line for line in lines)
    assert lines[-1] == "Type 'help' to see available commands"


def test_about_reads_about_file(executor: CommandExecutor, vfs: VirtualFileSystem) -> None:
    assert _texts(_run(executor, vfs, "about")) == ["Jane Doe - Engineer", "", "Builds things."]


def test_experience_renders_records(executor: CommandExecutor, vfs: VirtualFileSystem) -> None:
    lines = _texts(_run(executor, vfs, "experience"))
    assert lines[0] == "Work Experience"
    assert "Acme - Engineer" in lines
    assert "2020 - Present" in lines
    assert "  • Shipped it" in lines


def test_experience_skips_malformed_records(executor: CommandExecutor) -> None:
    vfs = VirtualFileSystem(
        directory_node(
            "/",
            [
                directory_node(
                    "experience",
                    [
                        file_node("bad.json", "{not json"),
                        file_node("good.json", '{"company": "Good", "role": "Dev", "achievements": []}'),
                    ],
                )
            ],
        )
    )
    result = _run(executor, vfs, "experience")
    assert result.exit_code == 0
    errors = [line.text for line in result.output if line.kind is OutputKind.ERROR]
    assert errors == ["Error parsing bad.json"]
    assert "Good - Dev" in _texts(result)


def test_projects_skills_contact_sections(executor: CommandExecutor, vfs: VirtualFileSystem) -> None:
    projects = _texts(_run(executor, vfs, "projects"))
    assert projects[0] == "Featured Projects"
    assert "# Demo" in projects
    assert "Python" in _texts(_run(executor, vfs, "skills"))
    assert "jane@example.com" in _texts(_run(executor, vfs, "contact"))


def test_projects_separates_documents(executor: CommandExecutor) -> None:
    vfs = VirtualFileSystem(
        directory_node("/", [directory_node("projects", [file_node("a.md", "# A"), file_node("b.md", "# B")])])
    )
    lines = _texts(_run(executor, vfs, "projects"))
    assert lines.count("---") == 1
    assert lines.index("# A") < lines.index("---") < lines.index("# B")


def test_shortcut_without_directory_is_reported(executor: CommandExecutor) -> None:
    vfs = VirtualFileSystem(directory_node("/"))
    result = _run(executor, vfs, "skills")
    assert result.exit_code == 1
    assert result.output[0].text.startswith("Error executing skills:")


def test_handler_exception_becomes_failure(
    executor: CommandExecutor, vfs: VirtualFileSystem, monkeypatch: Any
) -> None:
    def boom(*_: object) -> str:
        raise RuntimeError("kaboom")

    monkeypatch.setattr(vfs, "get_current_directory", boom)
    result = _run(executor, vfs, "pwd")
    assert result.exit_code == 1
    assert result.error == "kaboom"
    assert _texts(result) == ["Error executing pwd: kaboom"]


def test_output_lines_are_timestamped(executor: CommandExecutor, vfs: VirtualFileSystem) -> None:
    result = _run(executor, vfs, "pwd")
    assert result.output[0].timestamp.tzinfo is not None


def test_default_executor_uses_bundled_identity() -> None:
    assert CommandExecutor().identity.username == "dheeraj"


def test_unreadable_section_file_is_reported(
    executor: CommandExecutor, vfs: VirtualFileSystem, monkeypatch: Any
) -> None:
    def unreadable(path: str) -> Result[str]:
        return Result.failure(FsErrorKind.NOT_FOUND, path)

    monkeypatch.setattr(vfs, "read_file", unreadable)
    result = _run(executor, vfs, "experience")
    assert result.exit_code == 1
    assert _texts(result) == [
        "Error executing experience: /experience/acme.json: No such file or directory",
    ]


def test_experience_lists_slashed_company(executor: CommandExecutor) -> None:
    entry = ExperienceEntry(company="R/GA", role="Designer", period="2019", achievements=[])
    record = file_node(experience_file_name(entry), format_experience_record(entry))
    vfs = VirtualFileSystem(directory_node("/", [directory_node("experience", [record])]))
    assert "R/GA - Designer" in _texts(_run(executor, vfs, "experience"))
    assert _run(executor, vfs, "cat experience/r-ga.json").exit_code == 0

"""Advisory validation of parsed commands.

Validation never gates execution: callers run the executor regardless and may
see both a validation error and the executor's own error for the same input.
"""

from __future__ import annotations

from .models import CommandName, ParsedCommand, ValidationResult

HELP_HINT = "Type 'help' to see available commands"

NO_ARGUMENT_COMMANDS = frozenset(
    {
        CommandName.PWD,
        CommandName.CLEAR,
        CommandName.DATE,
        CommandName.WHOAMI,
        CommandName.NEOFETCH,
        CommandName.ABOUT,
        CommandName.EXPERIENCE,
        CommandName.PROJECTS,
        CommandName.SKILLS,
        CommandName.CONTACT,
        CommandName.EXIT,
        CommandName.GUI,
    }
)
SINGLE_ARGUMENT_COMMANDS = frozenset({CommandName.LS, CommandName.HELP, CommandName.CAT})


def validate(parsed: ParsedCommand) -> ValidationResult:
    """Report structural errors and stylistic warnings for one command."""
    if not parsed.command:
        return ValidationResult(is_valid=True)

    name = CommandName.lookup(parsed.command)
    if name is None:
        return ValidationResult(is_valid=False, errors=(f"Command not found: {parsed.command}", HELP_HINT))

    errors: list[str] = []
    warnings: list[str] = []
    arg_count = len(parsed.args)

    if name is CommandName.CD:
        if arg_count == 0:
            warnings.append("No directory specified, defaulting to home")
        elif arg_count > 1:
            errors.append("cd: too many arguments")
    elif name is CommandName.CAT and arg_count == 0:
        errors.append("cat: missing file operand")
    elif name in SINGLE_ARGUMENT_COMMANDS and arg_count > 1:
        warnings.append(f"{name}: ignoring extra arguments")
    elif name in NO_ARGUMENT_COMMANDS and arg_count > 0:
        warnings.append(f"{name}: ignoring arguments")

    return ValidationResult(is_valid=not errors, errors=tuple(errors), warnings=tuple(warnings))

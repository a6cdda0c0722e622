"""
Built-in `help` command.

- `help` lists the app's commands with their descriptions.
- `help <command_name>` shows one command's usage, options and arguments.

Register it like any other command; it is a natural default command:

    app.add_command(help := Help())
    app.set_default_command(help)
"""
from rich.box import ROUNDED
from rich.table import Table
from rich.text import Text

from .arguments import OptionType
from .commands import Command


class Help(Command):
    """Render the command list, or the details of one command."""

    def __init__(self):
        super().__init__("help", "Shows all commands available.")
        self.add_argument("command_name")

    def run(self):
        if not self.is_prepared():
            return False
        app, output, input, parameter = self._context

        if name := parameter.get_argument("command_name"):
            command = app.get_command(name)
            if command is None:
                output.write_error_block(f"Unknown command: {name}")
                return False
            self._describe(command, output, parameter)
            return True

        self._list(app, output, parameter)
        return True

    def _list(self, app, output, parameter):
        if app.get_name():
            output.writeln(Text(app.get_name(), style="bold"))
            output.newline()

        output.writeln("Usage:")
        output.writeln(f"  {parameter.get_script_name() or '<program>'} <command> [--option[=value] ...] [argument ...]")
        output.newline()

        table = Table(title="Available commands", title_justify="left", box=ROUNDED, show_header=False)
        table.add_column("command", style="bold cyan", no_wrap=True)
        table.add_column("description")
        for name, command in sorted(app.get_commands().items()):
            table.add_row(name, command.get_description() or "no description")
        output.console.print(table)

    def _describe(self, command, output, parameter):
        output.writeln(Text(command.get_name(), style="bold"))
        if command.get_description():
            output.writeln(command.get_description())
        output.newline()

        output.writeln("Usage:")
        output.writeln(f"  {parameter.get_script_name() or '<program>'} {command.get_usage()}")

        if options := command.get_options():
            output.newline()
            table = Table(title="Options", title_justify="left", box=ROUNDED, show_header=False)
            table.add_column("option", style="bold cyan", no_wrap=True)
            table.add_column("details")
            for option in options.values():
                details = [
                    "required" if option.is_required() else "optional",
                    {
                        OptionType.FLAG: "flag",
                        OptionType.VALUE_OPTIONAL: "value optional",
                        OptionType.VALUE_REQUIRED: "value required",
                    }[option.option_type],
                ]
                if option.get_default_value() is not None:
                    details.append(f"default: {option.get_default_value()!r}")
                table.add_row(f"--{option.get_name()}", ", ".join(details))
            output.console.print(table)

        if arguments := command.get_arguments():
            output.newline()
            table = Table(title="Arguments", title_justify="left", box=ROUNDED, show_header=False)
            table.add_column("argument", style="bold cyan", no_wrap=True)
            table.add_column("details")
            for index, argument in enumerate(arguments.values(), start=1):
                details = ["required" if argument.is_required() else "optional"]
                if argument.get_default_value() is not None:
                    details.append(f"default: {argument.get_default_value()!r}")
                table.add_row(f"{index}:{argument.get_name()}", ", ".join(details))
            output.console.print(table)


__all__ = (
    "Help",
)

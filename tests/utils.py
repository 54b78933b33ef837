"""
Test utilities shared across the nmvpn test suite.
"""

from nmvpn.core.models import CommandOutput

LIST_ALL = ("nmcli", "-t", "-f", "NAME,TYPE", "connection", "show")
LIST_ACTIVE = LIST_ALL + ("--active",)


class FakeRunner:
    """Command runner returning scripted outputs and recording calls.

    Unscripted commands succeed with no output.
    """

    def __init__(self):
        self.responses: dict[tuple[str, ...], CommandOutput] = {}
        self.calls: list[tuple[str, ...]] = []

    def script(self, args, output: str = "", returncode: int = 0) -> None:
        args = tuple(args)
        self.responses[args] = CommandOutput(
            args=list(args), returncode=returncode, output=output
        )

    def run(self, args) -> CommandOutput:
        args = tuple(args)
        self.calls.append(args)
        if args in self.responses:
            return self.responses[args]
        return CommandOutput(args=list(args), returncode=0, output="")

    def called(self, *prefix: str) -> list[tuple[str, ...]]:
        """Calls starting with the given arguments."""
        return [call for call in self.calls if call[:len(prefix)] == prefix]

"""Options understood by the grammar engine."""

from dataclasses import asdict, dataclass
from typing import Any, Dict, List

MESSAGE_FORMATS = ("antlr", "gnu", "vs2005")


@dataclass(frozen=True)
class ToolOptions:
    """Scalar options passed to the grammar engine.

    Attributes
    ----------
    report : bool
        Report statistics about each processed grammar (cyclic DFAs, rules
        that may backtrack, ...)
    print_grammar : bool
        Print the input grammars stripped of embedded actions
    debug : bool
        Generate parsers in debug mode; they wait for a debugger connection
    profile : bool
        Generate parsers that compute and report profiling information
    nfa : bool
        Emit a Graphviz description of the NFA for each rule
    dfa : bool
        Emit a Graphviz description of the DFA for each decision
    trace : bool
        Generate parsers that log rule entry and exit
    message_format : str
        Format of warnings and errors: ``antlr``, ``gnu`` or ``vs2005``
    verbose : bool
        Report verbose messages (file names, tool version, ...)
    max_switch_case_labels : int
        Maximum number of alternatives in a generated inline switch
    min_switch_alts : int
        Minimum number of alternatives before a switch is generated
        instead of an if/else chain
    """

    report: bool = False
    print_grammar: bool = False
    debug: bool = False
    profile: bool = False
    nfa: bool = False
    dfa: bool = False
    trace: bool = False
    message_format: str = "antlr"
    verbose: bool = True
    max_switch_case_labels: int = 300
    min_switch_alts: int = 3

    def __post_init__(self):
        if self.message_format not in MESSAGE_FORMATS:
            raise ValueError(
                f"Unknown message format '{self.message_format}', "
                f"expected one of {', '.join(MESSAGE_FORMATS)}"
            )
        for name in ("max_switch_case_labels", "min_switch_alts"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int) or value < 1:
                raise ValueError(f"{name} must be a positive integer, got {value!r}")

    def to_args(self) -> List[str]:
        """Build the tool's command-line flags for these options.

        Example
        -------
        >>> ToolOptions(report=True, verbose=False).to_args()
        ['-report', '-message-format', 'antlr', '-Xmaxswitchcaselabels', '300', '-Xminswitchalts', '3']
        """
        flags = [
            (self.report, "-report"),
            (self.print_grammar, "-print"),
            (self.debug, "-debug"),
            (self.profile, "-profile"),
            (self.trace, "-trace"),
            (self.nfa, "-nfa"),
            (self.dfa, "-dfa"),
            (self.verbose, "-verbose"),
        ]
        args = [flag for enabled, flag in flags if enabled]
        args += ["-message-format", self.message_format]
        args += ["-Xmaxswitchcaselabels", str(self.max_switch_case_labels)]
        args += ["-Xminswitchalts", str(self.min_switch_alts)]
        return args

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return asdict(self)

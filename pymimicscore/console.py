"""
Console utilities and Rich formatting for PyMimicScore.

Provides CLI output with the Rich library:
- Styled header and status messages
- Score breakdown table
- Performance message for the final score
"""

from rich.console import Console
from rich.panel import Panel
from rich.style import Style
from rich.table import Table
from rich.text import Text
from rich.box import ROUNDED

from pymimicscore.analysis.experts import ExpertEnsemble
from pymimicscore.analysis.scoring import ScoreBreakdown

# Module-level rich console instance
rich_console = Console()

# ============================================================================
# STYLES
# ============================================================================

STYLE_SUCCESS = Style(color="green", bold=True)
STYLE_ERROR = Style(color="red", bold=True)
STYLE_WARNING = Style(color="yellow")
STYLE_INFO = Style(color="cyan")
STYLE_DIM = Style(dim=True)
STYLE_HEADER = Style(color="bright_white", bold=True)
STYLE_SCORE_HIGH = Style(color="green", bold=True)
STYLE_SCORE_MED = Style(color="yellow")
STYLE_SCORE_LOW = Style(color="red")

# (minimum score, headline, description), checked top to bottom
PERFORMANCE_MESSAGES = [
    (90, "Perfect!", "You're a reverse karaoke master!"),
    (80, "Excellent!", "Amazing mimicry skills!"),
    (70, "Great Job!", "Very impressive matching!"),
    (60, "Good Try!", "You're getting the hang of it!"),
    (50, "Not Bad!", "Room for improvement, but solid effort!"),
    (0, "Keep Practicing!", "This is harder than it looks! Try again?"),
]


# ============================================================================
# UI COMPONENTS
# ============================================================================

def print_header(title: str, subtitle: str = None):
    """Print a styled header."""
    header_text = Text(title, style=STYLE_HEADER)
    if subtitle:
        header_text.append(f"\n{subtitle}", style=STYLE_DIM)

    panel = Panel(
        header_text,
        box=ROUNDED,
        border_style="cyan",
        padding=(0, 2),
    )
    rich_console.print(panel)


def print_status(message: str, status: str = "info"):
    """Print a styled status message."""
    icons = {
        "success": ("✓", STYLE_SUCCESS),
        "error": ("✗", STYLE_ERROR),
        "warning": ("⚠", STYLE_WARNING),
        "info": ("•", STYLE_INFO),
    }
    icon, style = icons.get(status, ("•", STYLE_INFO))
    rich_console.print(f"[{style.color.name}]{icon}[/] {message}")


def score_to_style(score: float) -> Style:
    """Get appropriate style for a similarity in [0, 1]."""
    if score >= 0.75:
        return STYLE_SCORE_HIGH
    elif score >= 0.5:
        return STYLE_SCORE_MED
    else:
        return STYLE_SCORE_LOW


def format_score(score: float, width: int = 6) -> Text:
    """Format a similarity with appropriate coloring."""
    text = f"{score:.1%}".rjust(width)
    return Text(text, style=score_to_style(score))


def performance_message(score: int) -> tuple[str, str]:
    """Headline and description for a final 0-100 score."""
    for minimum, headline, description in PERFORMANCE_MESSAGES:
        if score >= minimum:
            return headline, description
    return PERFORMANCE_MESSAGES[-1][1:]


def breakdown_table(breakdown: ScoreBreakdown, ensemble: ExpertEnsemble | None = None) -> Table:
    """Per-expert similarity table followed by the raw and adjusted scores."""
    ensemble = ensemble or ExpertEnsemble()
    terms = breakdown.terms()

    table = Table(
        title="Scoring Breakdown",
        box=ROUNDED,
        header_style="bold cyan",
        title_style="bold",
    )
    table.add_column("Descriptor", style="white")
    table.add_column("Similarity", justify="right")
    table.add_column("Weight", justify="right", style="dim")

    for expert in ensemble.experts:
        table.add_row(expert.label, format_score(terms[expert.name]), f"{expert.weight:.0%}")

    table.add_section()
    table.add_row("Raw weighted score", format_score(breakdown.raw), "")
    table.add_row("After curve adjustment", Text(f"{breakdown.adjusted:.1f}", style=STYLE_INFO), "")
    return table


def print_result(breakdown: ScoreBreakdown, show_breakdown: bool = True):
    """Print the final score, optionally preceded by the breakdown table."""
    if show_breakdown:
        rich_console.print(breakdown_table(breakdown))

    headline, description = performance_message(breakdown.score)
    style = score_to_style(breakdown.score / 100)
    rich_console.print(
        Panel(
            Text.assemble((f"{breakdown.score}%", style), f"  {headline}\n", (description, STYLE_DIM)),
            box=ROUNDED,
            border_style="cyan",
            padding=(0, 2),
            title="Final score",
        )
    )


# ============================================================================
# CLI HELP GROUPS
# ============================================================================

_OPTION_GROUPS = {
    "pymimicscore compare": [
        {
            "name": "Recordings",
            "options": ["--reference", "--candidate", "--reverse-candidate", "--max-duration"],
        },
        {
            "name": "Analysis",
            "options": ["--spectrum", "--parallel"],
        },
        {
            "name": "Output",
            "options": ["--json", "--no-breakdown"],
        },
    ],
    "pymimicscore reverse": [
        {
            "name": "Export",
            "options": ["--output-dir", "--format"],
        },
    ],
}

_COMMAND_GROUPS = {
    "pymimicscore": [
        {
            "name": "Scoring Commands",
            "commands": ["compare"],
        },
        {
            "name": "Audio Commands",
            "commands": ["reverse"],
        },
    ]
}

"""Human-readable note report."""

from datetime import datetime
from pathlib import Path
from typing import List, Optional

from ..core import NoteEvent


class NoteReport:
    """Render detected notes as a plain-text table with summary statistics."""

    HEADER = "Format: Note | MIDI# | Start(s) | End(s) | Duration(s) | Frequency(Hz) | Confidence"

    def __init__(self, title: str = "Note Detection Results"):
        self.title = title

    def render(
        self,
        notes: List[NoteEvent],
        tempo: Optional[int] = None,
        generated: Optional[datetime] = None,
    ) -> str:
        """
        Build the report text.

        Args:
            notes: Detected notes
            tempo: Estimated tempo to include in the header
            generated: Timestamp for the header (default: now)

        Returns:
            Report as a single string
        """
        generated = generated or datetime.now()
        lines = [
            f"=== {self.title} ===",
            f"Generated on: {generated:%Y-%m-%d %H:%M:%S}",
            f"Total notes detected: {len(notes)}",
        ]
        if tempo is not None:
            lines.append(f"Estimated tempo: {tempo} BPM")
        lines += ["", self.HEADER, "-" * 80]

        for n in notes:
            lines.append(
                f"{n.pitch_name:<4} | {n.pitch:5d} | {n.start:8.3f} | {n.end:7.3f} | "
                f"{n.duration:10.3f} | {n.frequency:11.2f} | {n.confidence:.3f}"
            )

        lines += ["", "=== Summary Statistics ==="]
        if notes:
            lowest = min(notes, key=lambda n: n.pitch)
            highest = max(notes, key=lambda n: n.pitch)
            lines += [
                f"Earliest note: {min(n.start for n in notes):.3f}s",
                f"Latest note: {max(n.end for n in notes):.3f}s",
                f"Average duration: {sum(n.duration for n in notes) / len(notes):.3f}s",
                f"Lowest note: {lowest.pitch_name} (MIDI {lowest.pitch})",
                f"Highest note: {highest.pitch_name} (MIDI {highest.pitch})",
                f"Average confidence: {sum(n.confidence for n in notes) / len(notes):.3f}",
            ]

        return "\n".join(lines) + "\n"

    def export(self, notes: List[NoteEvent], output_path: str, tempo: Optional[int] = None) -> None:
        """Write the report to a text file."""
        path = Path(output_path)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(self.render(notes, tempo=tempo), encoding="utf-8")

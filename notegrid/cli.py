"""Command-line interface for notegrid.

Provides commands for:
- transcribe: Run a Basic Pitch ONNX model over audio and export MIDI
- info: Show audio file information and the window schedule
"""

import logging
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.progress import Progress, SpinnerColumn, TextColumn, BarColumn, TimeElapsedColumn
from rich.table import Table

from .core import DetectionConfig, NotegridError
from .core.constants import (
    DEFAULT_NOTE_THRESHOLD,
    DEFAULT_ONSET_THRESHOLD,
    DEFAULT_MIN_NOTE_DURATION,
    DEFAULT_OVERLAPPING_FRAMES,
    DEFAULT_MIN_FRAMES_BETWEEN_ONSETS,
)

app = typer.Typer(
    name="notegrid",
    help="Windowed pitch-model transcription to notes and tempo",
    rich_markup_mode="markdown",
)
console = Console()


def setup_logging(verbose: bool) -> None:
    """Route notegrid's loggers through rich."""
    logger = logging.getLogger("notegrid")
    logger.handlers.clear()
    logger.addHandler(RichHandler(console=console, show_path=False, markup=False))
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    logger.propagate = False


@app.command()
def transcribe(
    input_file: Path = typer.Argument(..., help="Input audio file (WAV, MP3, FLAC, ...)"),
    model_path: Path = typer.Option(
        ..., "-m", "--model", help="Basic Pitch ONNX model file"
    ),
    output: Optional[Path] = typer.Option(
        None, "-o", "--output", help="Output MIDI file path"
    ),
    report: Optional[Path] = typer.Option(
        None, "-r", "--report", help="Write a text report of detected notes"
    ),
    note_threshold: float = typer.Option(
        DEFAULT_NOTE_THRESHOLD, "--note-threshold", help="Note activation threshold (0-1)"
    ),
    onset_threshold: float = typer.Option(
        DEFAULT_ONSET_THRESHOLD, "--onset-threshold", help="Onset activation threshold (0-1)"
    ),
    min_duration: float = typer.Option(
        DEFAULT_MIN_NOTE_DURATION, "--min-duration", help="Minimum note duration in seconds"
    ),
    overlapping_frames: int = typer.Option(
        DEFAULT_OVERLAPPING_FRAMES, "--overlap", help="Frames shared by consecutive windows"
    ),
    normalize: bool = typer.Option(
        True, "--normalize/--no-normalize", help="Apply sigmoid to out-of-range model output"
    ),
    onset_splitting: bool = typer.Option(
        True, "--split/--no-split", help="Split repeated notes at detected onsets"
    ),
    min_onset_gap: int = typer.Option(
        DEFAULT_MIN_FRAMES_BETWEEN_ONSETS, "--min-onset-gap",
        help="Frames after a note start before an onset may split it",
    ),
    tempo: int = typer.Option(
        0, "-t", "--tempo", help="Override tempo (BPM). 0 = estimate from onsets"
    ),
    verbose: bool = typer.Option(
        False, "-v", "--verbose", help="Verbose output"
    ),
    json_output: bool = typer.Option(
        False, "--json", help="Output results as JSON (for scripting)"
    ),
):
    """Transcribe an audio file to MIDI with a Basic Pitch ONNX model.

    **Examples:**

        notegrid transcribe song.wav -m nmp.onnx

        notegrid transcribe song.mp3 -m nmp.onnx -o out.mid -r notes.txt --no-split
    """
    from .input import AudioLoader
    from .model import OnnxBasicPitchAdapter
    from .output import MIDIExporter, NoteReport
    from .transcription import NoteTranscriber

    setup_logging(verbose)

    if not input_file.exists():
        console.print(f"[red]Error: File not found: {input_file}[/red]")
        raise typer.Exit(1)

    if output is None:
        output = input_file.with_suffix(".mid")

    try:
        config = DetectionConfig(
            note_threshold=note_threshold,
            onset_threshold=onset_threshold,
            min_note_duration=min_duration,
            overlapping_frames=overlapping_frames,
            auto_normalize=normalize,
            onset_splitting=onset_splitting,
            min_frames_between_onsets=min_onset_gap,
        )

        if not json_output:
            console.print(f"[blue]Loading audio:[/blue] {input_file}")
        loader = AudioLoader()
        audio, sr = loader.load(str(input_file))

        adapter = OnnxBasicPitchAdapter(str(model_path))
        transcriber = NoteTranscriber(adapter, model=adapter.model, config=config)

        with Progress(
            SpinnerColumn(),
            TextColumn("[blue]Transcribing[/blue]"),
            BarColumn(),
            TextColumn("{task.completed}/{task.total} windows"),
            TimeElapsedColumn(),
            console=console,
            transient=True,
            disable=json_output,
        ) as progress:
            task = progress.add_task("windows", total=None)
            result = transcriber.transcribe(
                audio,
                sr,
                progress=lambda done, total: progress.update(task, completed=done, total=total),
            )
    except (NotegridError, ValueError, FileNotFoundError) as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)
    except ImportError as e:
        console.print(f"[red]Error: ONNX Runtime is not available ({escape(str(e))})[/red]")
        console.print(f"[red]Install it with: {escape('pip install notegrid[onnx]')}[/red]")
        raise typer.Exit(1)

    bpm = tempo if tempo > 0 else result.bpm
    MIDIExporter(tempo=bpm).export(result.notes, str(output))
    if report is not None:
        NoteReport().export(result.notes, str(report), tempo=bpm)

    if json_output:
        data = result.to_dict()
        data.update({"input": str(input_file), "output": str(output), "tempo": bpm})
        if report is not None:
            data["report"] = str(report)
        console.print_json(data=data)
        return

    console.print(f"  Detected {len(result.notes)} notes")
    if tempo > 0:
        console.print(f"  Tempo: {bpm} BPM (override)")
    elif result.tempo.snapped:
        console.print(f"  Tempo: {bpm} BPM (snapped from {result.tempo.raw_bpm})")
    else:
        console.print(f"  Tempo: {bpm} BPM")

    if verbose:
        stats = result.stats
        console.print(
            f"  Windows: {stats.windows_processed}, frames: {stats.frame_count}, "
            f"active frames: {stats.detections_above_threshold}"
        )
        if stats.activations.count:
            console.print(
                f"  Activations: min {stats.activations.minimum:.3f}, "
                f"max {stats.activations.maximum:.3f}, mean {stats.activations.mean:.3f}, "
                f"sigmoid applied: {stats.activations.normalized}"
            )
        if result.notes:
            _show_notes_table(result.notes)

    console.print(f"[blue]Exported:[/blue] {output}")
    if report is not None:
        console.print(f"[blue]Report:[/blue] {report}")
    console.print("[green]Transcription complete![/green]")


@app.command()
def info(
    input_file: Path = typer.Argument(..., help="Input audio file"),
    overlapping_frames: int = typer.Option(
        DEFAULT_OVERLAPPING_FRAMES, "--overlap", help="Frames shared by consecutive windows"
    ),
):
    """Show information about an audio file and how it would be windowed."""
    from .core import ModelConfig
    from .input import AudioLoader
    from .windowing import WindowScheduler

    if not input_file.exists():
        console.print(f"[red]Error: File not found: {input_file}[/red]")
        raise typer.Exit(1)

    try:
        model = ModelConfig()
        scheduler = WindowScheduler(model, DetectionConfig(overlapping_frames=overlapping_frames))
        loader = AudioLoader(boost_quiet=False)
        audio, sr = loader.load(str(input_file))
        windows = scheduler.window_count(len(audio))
    except (NotegridError, ValueError) as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)

    console.print(f"\n[bold]Audio Info:[/bold] {input_file.name}")
    console.print(f"  Duration: {loader.get_duration(audio, sr):.2f} seconds")
    console.print(f"  Sample rate: {sr} Hz")
    console.print(f"  Samples: {len(audio):,}")
    console.print(f"  Peak amplitude: {float(abs(audio).max()) if len(audio) else 0.0:.3f}")
    console.print(
        f"  Windows: {windows} x {model.window_length} samples "
        f"(hop {scheduler.hop_size}, overlap {scheduler.overlap_length})"
    )
    console.print(f"  Frames: {model.expected_frames(len(audio))} at {model.annotations_fps} fps")


def _show_notes_table(notes):
    """Display notes in a table."""
    table = Table(title="Detected Notes")
    table.add_column("Pitch", style="cyan")
    table.add_column("Start (s)", style="green")
    table.add_column("Duration (s)", style="yellow")
    table.add_column("Confidence", style="magenta")

    for note in notes:
        table.add_row(
            note.pitch_name,
            f"{note.start:.3f}",
            f"{note.duration:.3f}",
            f"{note.confidence:.2f}",
        )

    console.print(table)


def main():
    """Entry point."""
    app()


if __name__ == "__main__":
    main()

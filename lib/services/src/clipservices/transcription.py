# region Docstring
"""
clipservices.transcription
Local speech-to-text for copied audio files using ffmpeg and a whisper.cpp CLI.
Overview:
- Each copied audio file is first copied into the output directory as
    "clipboard_<timestamp>.<ext>" so the original is never modified.
- Non-WAV audio is converted to 16 kHz mono PCM WAV with ffmpeg, then passed to the
    whisper command. The segment timestamps whisper prints are stripped and the
    remaining lines are joined into one transcript.
Contents:
- Functions:
    - extract_transcript_text(output) -> str
- Service Classes:
    - AudioTranscriber:
        transcribe(paths) returns the TranscriptionResult of the first file that
        transcribes successfully; build_ffmpeg_command / build_whisper_command expose
        the exact command lines.
Design Notes:
- External commands run through subprocess.run with check=True; their failures are
    logged per file and the next file is tried.
- TranscriptionError is raised only when no file produced a transcript.
"""
# endregion
# region Imports
import re
import shutil
import subprocess
from logging import Logger
from pathlib import Path
from typing import Optional, Sequence, Union

from clipcore.config import TranscriptionSettings
from clipcore.errors import TranscriptionError
from clipcore.models.transforms import TranscriptionResult
from clipcore.utils import format_timestamp, get_time, is_audio_file, normalize_paths

# endregion
# region Functions
_SEGMENT_TIMESTAMP = re.compile(
    r"\[\d{2}:\d{2}:\d{2}\.\d{3} --> \d{2}:\d{2}:\d{2}\.\d{3}\]"
)


def extract_transcript_text(output: str) -> str:
    """
    Strip "[hh:mm:ss.mmm --> hh:mm:ss.mmm]" segment markers and join the text.

    Example:
        >>> extract_transcript_text("[00:00:00.000 --> 00:00:02.000]  Hello\\n\\n[00:00:02.000 --> 00:00:03.000] world")
        'Hello world'
    """
    lines = []
    for line in output.splitlines():
        if not line.strip():
            continue
        lines.append(_SEGMENT_TIMESTAMP.sub("", line, count=1).strip())
    return " ".join(line for line in lines if line)


# endregion
# region Service Classes
class AudioTranscriber:
    """
    Service for transcribing copied audio files.
    """

    def __init__(self, settings: TranscriptionSettings, output_dir: Union[str, Path], logger: Logger):
        """
        Initializes the AudioTranscriber.

        Args:
            settings (TranscriptionSettings): Commands, model, and conversion settings.
            output_dir (Union[str, Path]): Directory receiving audio copies and WAV files.
            logger (Logger): The logger instance for logging.
        """
        self.settings = settings
        self.output_dir = Path(output_dir)
        self.logger = logger.getChild("AudioTranscriber")

    def transcribe(self, paths: Union[str, Path, Sequence[Union[str, Path]]]) -> TranscriptionResult:
        """
        Transcribe the first audio file that succeeds. Paths without an audio
        extension are ignored.

        Raises:
            TranscriptionError: No file could be transcribed.
        """
        sources = [path for path in normalize_paths(paths) if is_audio_file(path)]
        if not sources:
            raise TranscriptionError("No audio files to transcribe")

        failures = []
        for source in sources:
            source_path = Path(source)
            try:
                audio_path = self._copy_source(source_path)
                size_mb = source_path.stat().st_size / 1024 / 1024
                self.logger.info(f"Audio file saved: {audio_path} ({size_mb:.2f} MB)")
                text = self._transcribe_file(audio_path)
            except (OSError, subprocess.SubprocessError) as e:
                self.logger.error(f"Failed to transcribe {source_path}: {e}")
                failures.append(f"{source_path}: {e}")
                continue
            self.logger.info(f"Transcription completed for {source_path}")
            return TranscriptionResult(text=text, source_path=source_path, audio_path=audio_path)

        raise TranscriptionError("Failed to transcribe audio: " + "; ".join(failures))

    def build_ffmpeg_command(self, source: Path, wav_path: Path) -> list[str]:
        return [
            self.settings.ffmpeg_command,
            "-y",
            "-i",
            str(source),
            "-ar",
            str(self.settings.sample_rate),
            "-ac",
            "1",
            "-c:a",
            "pcm_s16le",
            str(wav_path),
        ]

    def build_whisper_command(self, wav_path: Path) -> list[str]:
        command = [
            self.settings.whisper_command,
            "-m",
            str(self.settings.model_path),
            "-f",
            str(wav_path),
            "-l",
            self.settings.language,
        ]
        if self.settings.translate:
            command.append("-tr")
        return command

    def _copy_source(self, source: Path) -> Path:
        self.output_dir.mkdir(parents=True, exist_ok=True)
        stamp = re.sub(r"[:.]", "-", format_timestamp(get_time()))
        dest_path = self.output_dir / f"clipboard_{stamp}{source.suffix}"
        shutil.copyfile(source, dest_path)
        return dest_path

    def _transcribe_file(self, audio_path: Path) -> str:
        wav_path: Optional[Path] = None
        if audio_path.suffix.lower() == ".wav":
            target = audio_path
        else:
            wav_path = audio_path.with_suffix(".wav")
            self.logger.debug(f"Converting {audio_path} to WAV")
            self._run(self.build_ffmpeg_command(audio_path, wav_path))
            target = wav_path

        try:
            completed = self._run(self.build_whisper_command(target))
        finally:
            if wav_path is not None and not self.settings.keep_wav and wav_path.exists():
                wav_path.unlink()
        return extract_transcript_text(completed.stdout)

    def _run(self, command: list[str]) -> subprocess.CompletedProcess:
        self.logger.debug(f"Running: {' '.join(command)}")
        return subprocess.run(
            command,
            check=True,
            capture_output=True,
            text=True,
            timeout=self.settings.timeout,
        )


# endregion
__all__ = ["AudioTranscriber", "extract_transcript_text"]

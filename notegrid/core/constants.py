"""Global constants for notegrid."""

# Pitch names
PITCH_NAMES = ["C", "C#", "D", "D#", "E", "F", "F#", "G", "G#", "A", "A#", "B"]

# Model geometry (Basic Pitch ICASSP 2022)
MODEL_SAMPLE_RATE = 22050
FFT_HOP = 256
AUDIO_WINDOW_LENGTH = 2 * MODEL_SAMPLE_RATE - FFT_HOP  # 43844 samples
ANNOTATIONS_FPS = MODEL_SAMPLE_RATE // FFT_HOP  # 86
N_PITCHES = 88
N_CONTOUR_BINS = 264
LOWEST_MIDI = 21  # A0

# Detection defaults
DEFAULT_NOTE_THRESHOLD = 0.3
DEFAULT_ONSET_THRESHOLD = 0.5
DEFAULT_MIN_NOTE_DURATION = 0.127
DEFAULT_OVERLAPPING_FRAMES = 30
DEFAULT_MIN_FRAMES_BETWEEN_ONSETS = 3
ONSET_LOOKAHEAD_FRAMES = 2

# Tempo estimation
DEFAULT_TEMPO = 120
MIN_TEMPO = 40
MAX_TEMPO = 200
MIN_BEAT_INTERVAL = 0.05
MAX_BEAT_INTERVAL = 2.0
BEAT_DIVISIONS = (1, 2, 4)
TEMPO_VOTE_TOLERANCE = 2
COMMON_TEMPOS = (60, 70, 80, 90, 100, 110, 120, 130, 140, 150, 160)
COMMON_TEMPO_SNAP = 3

# Largest index the flattened grids may address
MAX_INDEX = 2**31 - 1

# MIDI velocity ceiling
MIDI_MAX = 127

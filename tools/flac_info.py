import sys

import soundfile as sf

path = sys.argv[1] if len(sys.argv) > 1 else "output.flac"

info = sf.info(path)
print("format:", info.format, info.subtype)
print("sample_rate:", info.samplerate)
print("channels:", info.channels)
print("frames:", info.frames)
print("duration_s:", round(info.duration, 3))

"""All magic numbers and configuration constants."""

VIDEO_WIDTH = 1080                  # 9:16 vertical for Reels/TikTok/Shorts
VIDEO_HEIGHT = 1920
VIDEO_FPS = 30
VIDEO_BG_COLOR = "#1a1a2e"
TOTAL_DURATION_SECONDS = 60         # one shared total for timeline and subtitles
INTRO_DURATION_SECONDS = 3
OUTRO_DURATION_SECONDS = 7          # nominal; the outro absorbs any remainder
SEGMENT_MIN_SECONDS = 6
SEGMENT_MAX_SECONDS = 8
SEGMENT_COUNT = 5
SUMMARY_MAX_CHARS = 800             # chars of cleaned description kept
SUMMARY_MIN_BREAK = 200             # only cut at a sentence end past this index
FEED_ITEM_LIMIT = 20                # most recent items taken per source
INTRO_TEMPLATE = "Today, we're going to explore an incredible story: {title}."
OUTRO_TEXT = (
    "What do you think about this story? Leave a comment below! "
    "Don't forget to subscribe for more amazing stories!"
)
OUTRO_ANIMATION = "pulse-bounce"
RSS_SOURCES = [
    {"name": "Today I Found Out", "url": "https://todayifoundout.com/feed/"},
    {"name": "Listverse", "url": "https://listverse.com/feed/"},
    {"name": "Weird History", "url": "https://weirdhistory.com/feed/"},
]
EDGE_VOICE = "en-US-AriaNeural"     # edge-tts narrator voice
EDGE_RATE = "+0%"
ESPEAK_PITCH = 60
ESPEAK_SPEED = 150                  # words per minute
ESPEAK_MAX_CHARS = 300              # espeak-ng input cap per clip
AUDIO_BITRATE = "128k"
TOOL_TIMEOUT_SECONDS = 120          # per external tool invocation
MIN_UPLOAD_BYTES = 1000             # smaller outputs are treated as broken renders
GITHUB_REPO = "weiyongsheng1124/MoltbotAP-story-video"
GITHUB_VIDEO_DIR = "video"
GITHUB_API = "https://api.github.com"
OUTPUT_DIR = "output"
VERSION = "0.1.0"

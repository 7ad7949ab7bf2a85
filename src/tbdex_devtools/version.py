"""SDK version for tbDEX DevTools"""

SDK_VERSION = "0.1.0"

"""ffprobe access and temporary upload files."""

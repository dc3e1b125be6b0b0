"""Small helpers for text, numbers, hashing, files and timing."""
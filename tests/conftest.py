import os

# Keep telelog off the terminal while pytest owns it.
os.environ.setdefault("VIM_INTERP_DISABLE_CONSOLE", "1")

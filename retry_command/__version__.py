__title__ = "retry"
__description__ = (
    "Run a command again and again until its exit status is acceptable or a timeout elapses."
)
__version__ = "0.4.0"
__intro__ = f"{__title__} {__version__}"

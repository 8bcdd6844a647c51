"""Core building blocks: options, configuration, temp files and the generator."""

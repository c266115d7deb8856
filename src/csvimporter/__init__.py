# Import main and ParseSession lazily to avoid circular dependencies
def __getattr__(name):
    if name == "main":
        from csvimporter.cli.main import main
        return main
    if name == "ParseSession":
        from csvimporter.domain.session import ParseSession
        return ParseSession
    raise AttributeError(f"module '{__name__}' has no attribute '{name}'")

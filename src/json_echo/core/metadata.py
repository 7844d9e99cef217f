from importlib import metadata

_DISTRIBUTION = "json-echo-service"


def _load_project_metadata() -> tuple[str, str]:
    try:
        return _DISTRIBUTION, metadata.version(_DISTRIBUTION)
    except metadata.PackageNotFoundError:
        return _DISTRIBUTION, "0.0.0"

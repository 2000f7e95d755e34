"""Basic package import smoke tests."""


def test_package_imports() -> None:
    """Ensure the top-level package metadata is importable."""
    import tray_item  # noqa: PLC0415

    assert hasattr(tray_item, "__all__")
    for name in tray_item.__all__:
        assert hasattr(tray_item, name)

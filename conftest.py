pytest_plugins = ["pullgate.testing.conftest"]

"""Version metadata consistency tests."""

from importlib.metadata import PackageNotFoundError, version

import multisector_dsge


def test_dunder_version_matches_distribution_metadata() -> None:
    """__version__ と配布メタデータの整合性を保証する。"""
    try:
        dist_version = version("msdsge")
    except PackageNotFoundError:
        assert multisector_dsge.__version__ == "0+unknown"
        return

    assert multisector_dsge.__version__ == dist_version

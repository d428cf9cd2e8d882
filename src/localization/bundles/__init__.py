from localization.bundles.service import (
    LocaleBundle,
    NamespaceBundles,
    build_bundles,
    build_namespace_bundle,
    group_bundles,
)

__all__ = [
    "LocaleBundle",
    "NamespaceBundles",
    "build_bundles",
    "build_namespace_bundle",
    "group_bundles",
]

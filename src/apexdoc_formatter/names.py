from typing import Dict, Mapping, Optional, Protocol

TAG = "tag"
GROUP = "group"
ANNOTATION = "annotation"

APEXDOC_TAGS = (
    "param",
    "return",
    "throws",
    "see",
    "since",
    "author",
    "version",
    "deprecated",
    "group",
    "example",
)

GROUP_NAMES = {
    "class": "Class",
    "constructor": "Constructor",
    "enum": "Enum",
    "interface": "Interface",
    "method": "Method",
    "property": "Property",
    "trigger": "Trigger",
    "test": "Test",
}

APEX_ANNOTATIONS = {
    "auraenabled": "AuraEnabled",
    "deprecated": "Deprecated",
    "future": "Future",
    "httpdelete": "HttpDelete",
    "httpget": "HttpGet",
    "httppatch": "HttpPatch",
    "httppost": "HttpPost",
    "httpput": "HttpPut",
    "invocablemethod": "InvocableMethod",
    "invocablevariable": "InvocableVariable",
    "istest": "IsTest",
    "jsonaccess": "JsonAccess",
    "namespaceaccessible": "NamespaceAccessible",
    "readonly": "ReadOnly",
    "remoteaction": "RemoteAction",
    "restresource": "RestResource",
    "suppresswarnings": "SuppressWarnings",
    "testsetup": "TestSetup",
    "testvisible": "TestVisible",
}


class NameNormalizer(Protocol):
    def normalize(self, category: str, raw_name: str) -> str:
        """Return the canonical spelling of `raw_name`, or `raw_name` unchanged."""
        ...


class TableNormalizer:
    """Case-insensitive lookup tables keyed by category."""

    def __init__(self, tables: Optional[Mapping[str, Mapping[str, str]]] = None):
        self._tables: Dict[str, Dict[str, str]] = {}
        for category, entries in (tables or {}).items():
            self._tables[category] = {key.lower(): value for key, value in entries.items()}

    @classmethod
    def default(cls) -> "TableNormalizer":
        return cls({
            TAG: {name: name for name in APEXDOC_TAGS},
            GROUP: GROUP_NAMES,
            ANNOTATION: APEX_ANNOTATIONS,
        })

    def extend(self, tables: Mapping[str, Mapping[str, str]]) -> "TableNormalizer":
        """Return a new normalizer with `tables` merged over this one."""
        merged = {category: dict(entries) for category, entries in self._tables.items()}
        for category, entries in tables.items():
            merged.setdefault(category, {}).update(
                {key.lower(): value for key, value in entries.items()}
            )
        return TableNormalizer(merged)

    def normalize(self, category: str, raw_name: str) -> str:
        return self._tables.get(category, {}).get(raw_name.lower(), raw_name)

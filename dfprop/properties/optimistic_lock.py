"""Optimistic lock columns: ``optimisticLockDefinitionMap``."""

from dfprop.properties.base import AbstractProperties

DEFAULT_VERSION_NO_FIELD_NAME = "VERSION_NO"


class OptimisticLockProperties(AbstractProperties):
    """
    Column names used for optimistic locking.

    Example:
    ```
    map:{
        ; updateDateFieldName = UPDATE_DATETIME
        ; versionNoFieldName = VERSION_NO
    }
    ```
    """

    group_name = "optimisticLockDefinitionMap"

    def _build(self) -> None:
        get = self.accessor.get_string
        self.update_date_field_name = get(self.mapping, "updateDateFieldName", "")
        self.version_no_field_name = get(
            self.mapping, "versionNoFieldName", DEFAULT_VERSION_NO_FIELD_NAME
        )

    def is_update_date_column(self, column_name: str) -> bool:
        if not self.update_date_field_name:
            return False
        return self.update_date_field_name.lower() == column_name.lower()

    def is_version_no_column(self, column_name: str) -> bool:
        return self.version_no_field_name.lower() == column_name.lower()

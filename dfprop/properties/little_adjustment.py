"""Generator feature flags: ``littleAdjustmentMap``."""

from dfprop.config import TemporalMode
from dfprop.properties.base import AbstractProperties
from dfprop.utils.logging import logger

KEY_JAVA8_LOCAL_DATE = "isAvailableJava8TimeLocalDateEntity"
KEY_JAVA8_ZONED_DATE = "isAvailableJava8TimeZonedDateEntity"
KEY_JODA_LOCAL_DATE = "isAvailableJodaTimeLocalDateEntity"
KEY_JODA_ZONED_DATE = "isAvailableJodaTimeZonedDateEntity"


class LittleAdjustmentProperties(AbstractProperties):
    """
    Small switches that adjust generated code.

    Every flag is a boolean read with the shared coercion rule: only ``true``
    switches a flag on, anything else keeps its default.

    Example:
    ```
    map:{
        ; isAvailableJava8TimeLocalDateEntity = true
        ; isMakeDeprecated = false
        ; isPagingCountLater = true
    }
    ```
    """

    group_name = "littleAdjustmentMap"

    def _build(self) -> None:
        self.temporal_mode = self._resolve_temporal_mode()

    def is_property(self, key: str, default: bool = False) -> bool:
        return self.accessor.get_boolean(self.mapping, key, default)

    def get_property(self, key: str, default=None):
        return self.accessor.get_string(self.mapping, key, default)

    # ------------------------------------------------------------------
    # Temporal library
    # ------------------------------------------------------------------
    def is_available_java8_time_local_date_entity(self) -> bool:
        return self.is_property(KEY_JAVA8_LOCAL_DATE)

    def is_available_java8_time_zoned_date_entity(self) -> bool:
        return self.is_property(KEY_JAVA8_ZONED_DATE)

    def is_available_joda_time_local_date_entity(self) -> bool:
        return self.is_property(KEY_JODA_LOCAL_DATE)

    def is_available_joda_time_zoned_date_entity(self) -> bool:
        return self.is_property(KEY_JODA_ZONED_DATE)

    def is_available_java8_time_entity(self) -> bool:
        return (
            self.is_available_java8_time_local_date_entity()
            or self.is_available_java8_time_zoned_date_entity()
        )

    def is_available_joda_time_entity(self) -> bool:
        return (
            self.is_available_joda_time_local_date_entity()
            or self.is_available_joda_time_zoned_date_entity()
        )

    def _resolve_temporal_mode(self) -> TemporalMode:
        java8 = self.is_available_java8_time_local_date_entity()
        joda = self.is_available_joda_time_local_date_entity()
        if java8 and joda:
            logger.warning(
                "Both temporal libraries are enabled, using Joda-Time",
                java8_key=KEY_JAVA8_LOCAL_DATE,
                joda_key=KEY_JODA_LOCAL_DATE,
            )
            return TemporalMode.JODA
        if joda:
            return TemporalMode.JODA
        if java8:
            return TemporalMode.JAVA8
        return TemporalMode.NONE

    # ------------------------------------------------------------------
    # Query and generation switches
    # ------------------------------------------------------------------
    def is_available_database_dependency(self) -> bool:
        return self.is_property("isAvailableDatabaseDependency")

    def is_available_non_primary_key_writable(self) -> bool:
        return self.is_property("isAvailableNonPrimaryKeyWritable")

    def is_entity_convert_empty_string_to_null(self) -> bool:
        return self.is_property("isEntityConvertEmptyStringToNull")

    def is_make_entity_chase_relation(self) -> bool:
        return self.is_property("isMakeEntityChaseRelation")

    def is_make_condition_query_not_equal_as_standard(self) -> bool:
        return self.is_property("isMakeConditionQueryNotEqualAsStandard", True)

    def is_paging_count_later(self) -> bool:
        return self.is_property("isPagingCountLater", True)

    def is_paging_count_least_join(self) -> bool:
        return self.is_property("isPagingCountLeastJoin", True)

    def is_inner_join_auto_detect(self) -> bool:
        return self.is_property("isInnerJoinAutoDetect", True)

    def is_table_sql_name_upper_case(self) -> bool:
        return self.is_property("isTableSqlNameUpperCase")

    def is_column_sql_name_upper_case(self) -> bool:
        return self.is_property("isColumnSqlNameUpperCase")

    def is_make_deprecated(self) -> bool:
        return self.is_property("isMakeDeprecated")

    def is_make_recently_deprecated(self) -> bool:
        return self.is_property("isMakeRecentlyDeprecated", True)

    def is_stop_generate_extended_bhv(self) -> bool:
        return self.is_property("isStopGenerateExtendedBhv")

    def get_short_char_handling_mode(self) -> str:
        return self.get_property("shortCharHandlingMode", "NONE").upper()

    def is_short_char_handling_valid(self) -> bool:
        return self.get_short_char_handling_mode() != "NONE"

    def get_short_char_handling_mode_code(self) -> str:
        return self.get_short_char_handling_mode()[0]

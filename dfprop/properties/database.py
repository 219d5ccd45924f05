"""Connection settings: ``databaseInfoMap``."""

from typing import List, Tuple

from dfprop.config import DatabaseInfo
from dfprop.properties.base import AbstractProperties
from dfprop.utils.logging import logger

KEY_VARIOUS_MAP = "variousMap"
GEN_ONLY_SUFFIX = "@gen"
DEFAULT_OBJECT_TYPE_TARGET_LIST = ["TABLE", "VIEW"]


def split_gen_only(names: List[str]) -> Tuple[List[str], List[str]]:
    """Split except-list entries into plain excepts and ``NAME@gen`` entries.

    ``@gen`` entries are read from the schema but get no generated classes.
    """
    except_list = []
    gen_only_list = []
    for name in names:
        if name.lower().endswith(GEN_ONLY_SUFFIX):
            gen_only_list.append(name[: -len(GEN_ONLY_SUFFIX)])
        else:
            except_list.append(name)
    return except_list, gen_only_list


class DatabaseProperties(AbstractProperties):
    """
    Database connection of the generation run.

    ``driver`` and ``url`` are required. The password is registered with the
    logger so it never appears in log output.

    Example:
    ```
    map:{
        ; driver   = com.mysql.jdbc.Driver
        ; url      = jdbc:mysql://localhost:3306/maihamadb
        ; schema   =
        ; user     = maihamadb
        ; password = maihamadb
        ; variousMap = map:{
            ; objectTypeTargetList = list:{TABLE ; VIEW}
            ; tableExceptList = list:{TMP_SEA ; TMP_LAND@gen}
        }
    }
    ```
    """

    group_name = "databaseInfoMap"

    def _build(self) -> None:
        get = self.accessor.get_string
        mapping = self.mapping
        password = get(mapping, "password", "")
        logger.register_secret(password)

        various_map = self.accessor.get_map(mapping, KEY_VARIOUS_MAP)
        object_types = self.accessor.get_string_list(various_map, "objectTypeTargetList")
        table_except_list, table_except_gen_only_list = split_gen_only(
            self.accessor.get_string_list(various_map, "tableExceptList")
        )

        self.info = DatabaseInfo(
            driver=self.accessor.require_string(mapping, "driver"),
            url=self.accessor.require_string(mapping, "url"),
            catalog=get(mapping, "catalog"),
            schema_name=get(mapping, "schema"),
            user=get(mapping, "user"),
            password=password,
            object_type_target_list=object_types or list(DEFAULT_OBJECT_TYPE_TARGET_LIST),
            table_except_list=table_except_list,
            table_except_gen_only_list=table_except_gen_only_list,
            table_target_list=self.accessor.get_string_list(various_map, "tableTargetList"),
        )

    @property
    def driver(self) -> str:
        return self.info.driver

    @property
    def url(self) -> str:
        return self.info.url

    @property
    def schema_name(self):
        return self.info.schema_name

    def is_table_except(self, table_name: str) -> bool:
        target = table_name.lower()
        return any(name.lower() == target for name in self.info.table_except_list)

    def is_table_target(self, table_name: str) -> bool:
        """True when no target list is set, or the table is on it."""
        if not self.info.table_target_list:
            return True
        target = table_name.lower()
        return any(name.lower() == target for name in self.info.table_target_list)

import pytest

from dfprop.exceptions import ConfigShapeError, DomainInvariantError
from dfprop.properties import SequenceIdentityProperties
from dfprop.properties.sequence_identity import extract_sequence_name, split_sub_column_key


@pytest.fixture
def sequences(make_tree):
    return SequenceIdentityProperties(
        make_tree(
            sequenceDefinitionMap={
                "MEMBER": "SEQ_MEMBER",
                "PURCHASE": "SEQ_PURCHASE:dfcache(50)",
                "PRODUCT": "  ",
                "MEMBER_LOGIN.LOGIN_NO": "SEQ_LOGIN_NO",
            },
            identityDefinitionMap={"MEMBER_STATUS": "MEMBER_STATUS_ID"},
        )
    )


class TestHelpers:
    @pytest.mark.parametrize(
        "prop,expected",
        [
            ("SEQ_MEMBER", "SEQ_MEMBER"),
            ("SEQ_MEMBER:dfcache(50)", "SEQ_MEMBER"),
            ("SCHEMA.SEQ:a:b", "SCHEMA.SEQ:a"),
            (":dfcache(50)", None),
            ("", None),
            (None, None),
        ],
    )
    def test_extract_sequence_name(self, prop, expected):
        assert extract_sequence_name(prop) == expected

    def test_split_sub_column_key(self):
        assert split_sub_column_key("MEMBER_LOGIN.LOGIN_NO") == ("MEMBER_LOGIN", "LOGIN_NO")


class TestSequences:
    def test_primary_and_sub_column_sequences_are_separated(self, sequences):
        assert list(sequences.sequence_definition_map) == ["MEMBER", "PURCHASE", "PRODUCT"]
        assert list(sequences.sub_column_sequence_definition_map) == ["MEMBER_LOGIN.LOGIN_NO"]
        assert sequences.has_sub_column_sequence()

    def test_sequence_name_ignores_case(self, sequences):
        assert sequences.find_sequence_name("member") == "SEQ_MEMBER"
        assert sequences.find_sequence_name("PURCHASE") == "SEQ_PURCHASE"
        assert sequences.find_sequence_name("PRODUCT") is None
        assert sequences.find_sequence_name("UNKNOWN") is None

    def test_table_sequence_map(self, sequences):
        assert sequences.table_sequence_map() == {
            "MEMBER": "SEQ_MEMBER",
            "PURCHASE": "SEQ_PURCHASE",
            "PRODUCT": None,
        }

    def test_cache_size(self, sequences):
        assert sequences.find_sequence_cache_size("PURCHASE") == 50
        assert sequences.find_sequence_cache_size("MEMBER") is None
        assert sequences.find_sequence_cache_size("PRODUCT") is None

    def test_sub_column_sequence(self, sequences):
        assert sequences.find_sub_column_sequence_name("member_login", "login_no") == "SEQ_LOGIN_NO"
        assert sequences.find_sub_column_sequence_name("MEMBER", "LOGIN_NO") is None

    def test_unterminated_cache_hint(self, make_tree):
        sequences = SequenceIdentityProperties(
            make_tree(sequenceDefinitionMap={"MEMBER": "SEQ_MEMBER:dfcache(50"})
        )
        with pytest.raises(DomainInvariantError, match="end mark"):
            sequences.find_sequence_cache_size("MEMBER")

    def test_cache_size_must_be_integer(self, make_tree):
        sequences = SequenceIdentityProperties(
            make_tree(sequenceDefinitionMap={"MEMBER": "SEQ_MEMBER:dfcache(many)"})
        )
        with pytest.raises(DomainInvariantError, match="integer"):
            sequences.find_sequence_cache_size("MEMBER")

    def test_hint_on_sub_column_sequence_is_rejected(self, make_tree):
        with pytest.raises(DomainInvariantError, match="sub-column sequence is unsupported"):
            SequenceIdentityProperties(
                make_tree(sequenceDefinitionMap={"MEMBER.NO": "SEQ_NO:dfcache(5)"})
            )

    def test_sequence_value_must_be_string(self, make_tree):
        with pytest.raises(ConfigShapeError):
            SequenceIdentityProperties(make_tree(sequenceDefinitionMap={"MEMBER": {"a": "b"}}))


class TestIdentities:
    def test_identity_column(self, sequences):
        assert sequences.find_identity_column_name("member_status") == "MEMBER_STATUS_ID"
        assert sequences.find_identity_column_name("MEMBER") is None

    def test_identity_errors_name_identity_group(self, make_tree):
        with pytest.raises(ConfigShapeError) as exc_info:
            SequenceIdentityProperties(make_tree(identityDefinitionMap={"MEMBER": ["ID"]}))
        assert exc_info.value.subject == "identityDefinitionMap"

    def test_absent_groups(self):
        sequences = SequenceIdentityProperties()
        assert len(sequences.sequence_definition_map) == 0
        assert len(sequences.identity_definition_map) == 0
        assert not sequences.has_sub_column_sequence()

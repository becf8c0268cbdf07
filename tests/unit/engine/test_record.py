"""SessionRecord 모델 테스트

위치: yaml_session.engine.record
"""

import pytest

from yaml_session.core.errors import ErrorCode, InvalidSessionIdError
from yaml_session.engine.record import SessionRecord, new_session_id, validate_session_id


class TestSessionRecord:
    """SessionRecord 테스트"""

    def test_create_minimal(self):
        """id 자동 생성"""
        record = SessionRecord()

        assert isinstance(record.id, str)
        assert len(record.id) == 32
        assert record.session_data == {}

    def test_extra_fields(self, sample_session_data):
        """임의 세션 데이터 허용"""
        record = SessionRecord(**sample_session_data)

        assert record.user == "alice"
        assert record.roles == ["admin", "editor"]
        assert "id" not in record.session_data
        assert record.session_data["visits"] == 3

    def test_to_mapping_id_first(self):
        """id가 첫 번째 키"""
        record = SessionRecord(user="alice", id="abc")
        mapping = record.to_mapping()

        assert list(mapping)[0] == "id"
        assert mapping == {"id": "abc", "user": "alice"}

    def test_equality(self):
        """필드 단위 비교 (extra 포함)"""
        assert SessionRecord(id="abc", user="alice") == SessionRecord(id="abc", user="alice")
        assert SessionRecord(id="abc", user="alice") != SessionRecord(id="abc", user="bob")
        assert SessionRecord(id="abc") != SessionRecord(id="abc", user="alice")

    def test_mutable(self):
        """호출자가 flush 전에 수정 가능"""
        record = SessionRecord(id="abc")
        record.user = "alice"

        assert record.session_data == {"user": "alice"}

    def test_key_named_data(self):
        """'data' 키도 속성으로 읽힘"""
        record = SessionRecord(id="abc", data={"cart": [1, 2]})

        assert record.data == {"cart": [1, 2]}
        assert record.session_data == {"data": {"cart": [1, 2]}}

    def test_invalid_id(self):
        """파일 이름으로 쓸 수 없는 id"""
        with pytest.raises(InvalidSessionIdError) as exc_info:
            SessionRecord(id="../../etc/passwd")

        assert exc_info.value.code == ErrorCode.SESSION_INVALID_ID


class TestSessionId:
    """세션 ID 헬퍼 테스트"""

    def test_new_ids_unique(self):
        ids = {new_session_id() for _ in range(100)}
        assert len(ids) == 100

    def test_new_id_is_valid(self):
        assert validate_session_id(new_session_id())

    @pytest.mark.parametrize("value", ["abc", "a.b", "user-42_x", "123"])
    def test_valid(self, value):
        assert validate_session_id(value) == value

    @pytest.mark.parametrize("value", ["", ".", "..", "a/b", "a\\b", "a\0b", None, 42])
    def test_invalid(self, value):
        with pytest.raises(InvalidSessionIdError):
            validate_session_id(value)

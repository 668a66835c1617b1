# tests/test_record_store.py
import logging
from datetime import date, datetime

import pytest
from sqlalchemy.exc import IntegrityError, OperationalError

from student_registry.database.models import TransferStatus
from student_registry.services.record_store import RecordStore, StoreClosedError


def _transfer(student_id, **extra):
    data = {"student_id": student_id, "from_school": "North High", "to_school": "South High"}
    data.update(extra)
    return data


class TestStudents:

    def test_create_then_get_returns_non_empty_fields(self, store, student_data):
        created = store.create_student(student_data)
        fetched = store.get_student(created.id)

        assert fetched is not None
        for key, value in student_data.items():
            if value not in (None, ""):
                assert getattr(fetched, key) == value
        # empty strings are not inserted
        assert fetched.notes is None
        assert fetched.group_id is None

    def test_create_accepts_camel_case_keys(self, store):
        created = store.create_student({"nationalId": "100", "name": "Omar", "guardianName": "Ali"})
        assert created.national_id == "100"
        assert created.guardian_name == "Ali"

    def test_duplicate_national_id_fails_atomically(self, store):
        store.create_student({"national_id": "555", "name": "First"})

        with pytest.raises(IntegrityError):
            store.create_student({"national_id": "555", "name": "Second"})

        students = store.list_students()
        assert [s.name for s in students] == ["First"]

    def test_unknown_field_is_rejected(self, store):
        with pytest.raises(ValueError, match="favourite_colour"):
            store.create_student({"national_id": "1", "name": "A", "favourite_colour": "blue"})

    def test_missing_student_is_none(self, store):
        assert store.get_student(404) is None

    def test_list_is_ordered_by_name(self, store):
        for national_id, name in [("3", "Zeina"), ("1", "Amir"), ("2", "Laila")]:
            store.create_student({"national_id": national_id, "name": name})

        assert [s.name for s in store.list_students()] == ["Amir", "Laila", "Zeina"]

    def test_search_by_national_id_substring(self, store):
        store.create_student({"national_id": "30012345", "name": "Basma"})
        store.create_student({"national_id": "30098765", "name": "Adam"})
        store.create_student({"national_id": "41234000", "name": "Carim"})

        results = store.search_students("123", "nationalId")
        assert [s.name for s in results] == ["Basma", "Carim"]

    def test_search_by_name_is_case_sensitive(self, store):
        store.create_student({"national_id": "1", "name": "Ahmed"})
        store.create_student({"national_id": "2", "name": "ahmad"})

        assert [s.name for s in store.search_students("Ah", "name")] == ["Ahmed"]
        assert [s.name for s in store.search_students("ah", "name")] == ["ahmad"]

    def test_search_does_not_treat_like_wildcards_specially(self, store):
        store.create_student({"national_id": "1", "name": "Ahmed"})
        assert store.search_students("%", "name") == []

    def test_empty_search_lists_everyone(self, store):
        store.create_student({"national_id": "2", "name": "B"})
        store.create_student({"national_id": "1", "name": "A"})

        assert [s.name for s in store.search_students("", "nationalId")] == ["A", "B"]
        assert [s.name for s in store.search_students(None)] == ["A", "B"]

    def test_update_changes_only_supplied_fields(self, store, student_data):
        created = store.create_student(student_data)

        updated = store.update_student(created.id, {"class_code": "2B", "guardian_name": None})

        assert updated.class_code == "2B"
        assert updated.guardian_name is None
        assert updated.name == student_data["name"]
        assert updated.serial_number == student_data["serial_number"]

    def test_update_without_fields_reloads(self, store, student_data):
        created = store.create_student(student_data)
        assert store.update_student(created.id, {}).name == created.name

    def test_update_unknown_student_is_none(self, store):
        assert store.update_student(99, {"name": "Ghost"}) is None

    def test_update_to_duplicate_national_id_fails(self, store):
        store.create_student({"national_id": "1", "name": "A"})
        second = store.create_student({"national_id": "2", "name": "B"})

        with pytest.raises(IntegrityError):
            store.update_student(second.id, {"national_id": "1"})
        assert store.get_student(second.id).national_id == "2"

    def test_delete_removes_student_and_transfer_requests(self, store, student_data):
        student = store.create_student(student_data)
        store.create_transfer_request(_transfer(student.id))
        store.create_transfer_request(_transfer(student.id, to_school="East High"))

        assert store.delete_student(student.id) is True
        assert store.get_student(student.id) is None
        assert store.list_transfer_requests_by_student(student.id) == []

    def test_delete_missing_student_returns_false(self, store):
        assert store.delete_student(12345) is False


class TestBulkCreate:

    def test_duplicates_and_empty_records_are_skipped(self, store, caplog):
        records = [{"name": "A", "nationalId": "1"}, {"nationalId": "1"}, {}]

        with caplog.at_level(logging.WARNING, logger="student_registry"):
            created = store.bulk_create_students(records, "G1")

        groups = store.list_groups()
        assert [g.name for g in groups] == ["G1"]
        assert len(created) == 1
        assert created[0].name == "A"
        assert created[0].national_id == "1"
        assert created[0].group_id == groups[0].id
        assert "Skipping import record 1" in caplog.text
        assert len(store.list_students()) == 1

    def test_record_with_unknown_field_is_skipped(self, store, caplog):
        records = [
            {"name": "A", "national_id": "1"},
            {"name": "B", "national_id": "2", "classNmae": "x"},
        ]

        with caplog.at_level(logging.WARNING, logger="student_registry"):
            created = store.bulk_create_students(records, "G")

        assert [s.name for s in created] == ["A"]
        assert [g.name for g in store.list_groups()] == ["G"]
        assert "classNmae" in caplog.text
        assert [s.name for s in store.list_students()] == ["A"]

    def test_whitespace_values_are_kept(self, store):
        created = store.bulk_create_students([{"name": "  ", "national_id": "9"}])
        assert created[0].name == "  "

    def test_missing_values_get_placeholders(self, store):
        created = store.bulk_create_students([
            {"national_id": "777", "name": ""},
            {"name": "No Id"},
            {"name": "Also No Id", "national_id": None},
        ])

        assert [s.name for s in created] == ["Unknown", "No Id", "Also No Id"]
        placeholders = [s.national_id for s in created[1:]]
        assert all(p.startswith("temp-") for p in placeholders)
        assert len(set(placeholders)) == 2

    def test_placeholders_stay_unique_across_batches(self, store):
        first = store.bulk_create_students([{"name": "One"}])
        second = store.bulk_create_students([{"name": "Two"}])

        assert first[0].national_id != second[0].national_id

    def test_without_group_name_no_group_is_created(self, store):
        created = store.bulk_create_students([{"name": "Solo", "national_id": "9"}])

        assert store.list_groups() == []
        assert created[0].group_id is None

    def test_fatal_error_rolls_back_whole_batch(self, store, monkeypatch):
        original_insert = RecordStore._insert_student
        calls = []

        def failing_insert(db, fields):
            calls.append(fields)
            if len(calls) == 2:
                raise OperationalError("INSERT INTO students", {}, Exception("disk I/O error"))
            return original_insert(db, fields)

        monkeypatch.setattr(RecordStore, "_insert_student", staticmethod(failing_insert))

        with pytest.raises(OperationalError):
            store.bulk_create_students(
                [{"name": "A", "national_id": "1"}, {"name": "B", "national_id": "2"}],
                "Doomed",
            )

        assert store.list_students() == []
        assert store.list_groups() == []


class TestGroups:

    def test_groups_are_listed_newest_first(self, store):
        store.create_group("Old", datetime(2023, 9, 1))
        store.create_group("New", datetime(2024, 9, 1))
        store.create_group("Middle", datetime(2024, 1, 1))

        assert [g.name for g in store.list_groups()] == ["New", "Middle", "Old"]

    def test_create_group_defaults_timestamp(self, store):
        group = store.create_group("Intake")
        assert group.id is not None
        assert isinstance(group.created_at, datetime)

    def test_delete_group_cascades(self, store):
        doomed = store.create_group("Doomed")
        kept = store.create_group("Kept")
        member = store.create_student({"national_id": "1", "name": "Member", "group_id": doomed.id})
        other = store.create_student({"national_id": "2", "name": "Other", "group_id": kept.id})
        store.create_transfer_request(_transfer(member.id))
        store.create_transfer_request(_transfer(other.id))

        assert store.delete_group(doomed.id) is True

        assert [g.name for g in store.list_groups()] == ["Kept"]
        assert store.get_student(member.id) is None
        assert store.list_transfer_requests_by_student(member.id) == []
        assert store.get_student(other.id) is not None
        assert len(store.list_transfer_requests_by_student(other.id)) == 1

    def test_delete_missing_group_returns_false(self, store):
        assert store.delete_group(42) is False

    def test_delete_group_by_string_id(self, store):
        group = store.create_group("Text id")

        assert store.delete_group("latest") is False
        assert store.delete_group(str(group.id)) is True
        assert store.list_groups() == []

    def test_student_cannot_reference_missing_group(self, store):
        with pytest.raises(IntegrityError):
            store.create_student({"national_id": "1", "name": "A", "group_id": 999})


class TestTransferRequests:

    def test_defaults(self, store, student_data):
        student = store.create_student(student_data)

        transfer = store.create_transfer_request(_transfer(student.id))

        assert transfer.id is not None
        assert transfer.status == TransferStatus.PENDING
        assert transfer.transfer_reason is None
        assert transfer.request_date == date.today()

    def test_explicit_values_are_kept(self, store, student_data):
        student = store.create_student(student_data)

        transfer = store.create_transfer_request(_transfer(
            student.id,
            transfer_reason="Family moved",
            request_date=date(2024, 2, 1),
            status="approved",
        ))

        assert transfer.status == TransferStatus.APPROVED
        assert transfer.transfer_reason == "Family moved"
        assert transfer.request_date == date(2024, 2, 1)

    def test_accepts_camel_case_keys(self, store, student_data):
        student = store.create_student(student_data)

        transfer = store.create_transfer_request(
            {"studentId": student.id, "fromSchool": "a", "toSchool": "b", "transferReason": "Moved"}
        )

        assert transfer.student_id == student.id
        assert transfer.from_school == "a"
        assert transfer.to_school == "b"
        assert transfer.transfer_reason == "Moved"

    def test_missing_or_unknown_fields_raise_value_error(self, store, student_data):
        student = store.create_student(student_data)

        with pytest.raises(ValueError, match="to_school"):
            store.create_transfer_request({"studentId": student.id, "fromSchool": "a"})
        with pytest.raises(ValueError, match="school_name"):
            store.create_transfer_request(_transfer(student.id, school_name="x"))
        assert store.list_transfer_requests_by_student(student.id) == []

    def test_requires_existing_student(self, store):
        with pytest.raises(IntegrityError):
            store.create_transfer_request(_transfer(31337))

    def test_list_by_student(self, store):
        a = store.create_student({"national_id": "1", "name": "A"})
        b = store.create_student({"national_id": "2", "name": "B"})
        store.create_transfer_request(_transfer(a.id))
        store.create_transfer_request(_transfer(b.id))
        store.create_transfer_request(_transfer(a.id, to_school="West High"))

        assert [t.to_school for t in store.list_transfer_requests_by_student(a.id)] == [
            "South High",
            "West High",
        ]


class TestLifecycle:

    def test_closed_store_refuses_work(self, database_url):
        store = RecordStore(database_url)
        with pytest.raises(StoreClosedError):
            store.list_students()

        store.open()
        store.close()
        with pytest.raises(StoreClosedError):
            store.list_groups()

    def test_data_survives_reopen(self, tmp_path):
        url = f"sqlite:///{tmp_path / 'nested' / 'dir' / 'students.db'}"
        with RecordStore(url) as store:
            store.create_student({"national_id": "1", "name": "Persistent"})

        with RecordStore(url) as store:
            assert [s.name for s in store.list_students()] == ["Persistent"]

"""
Template Store Tests
====================
Upload validation, activation invariant, versioning and deletion.
"""

import random
from datetime import datetime, timedelta

import pytest

from hrcontracts.core.exceptions import NotFoundError, ValidationError
from hrcontracts.models import Contract, ContractTemplate
from hrcontracts.services.template_store import TemplateStore
from tests.helpers import make_docx


@pytest.fixture
def store(db):
    return TemplateStore(db)


def _upload(store, company, name="Standard", **kwargs):
    return store.upload(
        company_id=company.id,
        name=name,
        file_name=f"{name}.docx",
        content=kwargs.pop("content", make_docx(f"{name} {{{{firstName}}}}")),
        uploaded_by="user-1",
        **kwargs
    )


def _active_count(db, company):
    return db.query(ContractTemplate).filter(
        ContractTemplate.company_id == company.id,
        ContractTemplate.is_active.is_(True)
    ).count()


class TestUpload:

    def test_upload_creates_inactive_version_one(self, store, company):
        content = make_docx("Hello")
        template = _upload(store, company, content=content, description="Basic")

        assert template.id
        assert template.version == 1
        assert template.is_active is False
        assert template.content == content
        assert template.size_bytes == len(content)
        assert template.uploaded_by == "user-1"

    def test_declared_size_is_kept(self, store, company):
        template = _upload(store, company, size_bytes=12345)
        assert template.size_bytes == 12345

    def test_upload_can_activate(self, store, company):
        first = _upload(store, company, name="First", activate=True)
        second = _upload(store, company, name="Second", activate=True)

        assert store.get_active(company.id).id == second.id
        assert store.get(company.id, first.id).is_active is False

    @pytest.mark.parametrize("name", ["", "   "])
    def test_blank_name_rejected(self, store, company, name):
        with pytest.raises(ValidationError):
            _upload(store, company, name=name)

    def test_empty_content_rejected(self, store, company):
        with pytest.raises(ValidationError):
            _upload(store, company, content=b"")

    def test_oversized_content_rejected(self, store, company, monkeypatch):
        from hrcontracts.core.config import settings
        monkeypatch.setattr(settings, "MAX_TEMPLATE_SIZE", 10)

        with pytest.raises(ValidationError):
            _upload(store, company, content=b"x" * 11)

    def test_reupload_same_name_creates_new_row(self, store, company):
        first = _upload(store, company, name="Standard")
        second = _upload(store, company, name="Standard")

        assert first.id != second.id
        assert second.version == 1
        assert len(store.list(company.id)) == 2


class TestActivation:

    def test_no_active_template_initially(self, store, company):
        _upload(store, company)
        assert store.get_active(company.id) is None

    def test_activate_switches_active_template(self, store, company, db):
        first = _upload(store, company, name="First")
        second = _upload(store, company, name="Second")

        store.activate(company.id, first.id)
        assert store.get_active(company.id).id == first.id

        store.activate(company.id, second.id)
        assert store.get_active(company.id).id == second.id
        assert _active_count(db, company) == 1

    def test_exactly_one_active_after_any_sequence(self, store, company, db):
        templates = [_upload(store, company, name=f"T{i}") for i in range(5)]
        rng = random.Random(7)

        for _ in range(25):
            chosen = rng.choice(templates)
            store.activate(company.id, chosen.id)

            assert _active_count(db, company) == 1
            assert store.get_active(company.id).id == chosen.id

    def test_activation_is_scoped_to_company(self, store, company, other_company):
        ours = _upload(store, company, name="Ours")
        theirs = _upload(store, other_company, name="Theirs")
        store.activate(other_company.id, theirs.id)

        store.activate(company.id, ours.id)

        assert store.get_active(other_company.id).id == theirs.id
        assert store.get_active(company.id).id == ours.id

    def test_foreign_template_cannot_be_activated(self, store, company, other_company):
        theirs = _upload(store, other_company, name="Theirs")

        with pytest.raises(NotFoundError):
            store.activate(company.id, theirs.id)
        assert store.get_active(company.id) is None

    def test_unknown_template(self, store, company):
        with pytest.raises(NotFoundError):
            store.activate(company.id, "missing")


class TestReads:

    def test_list_is_newest_first(self, store, company, db):
        names = ["Oldest", "Middle", "Newest"]
        base = datetime(2024, 1, 1)
        for offset, name in enumerate(names):
            template = _upload(store, company, name=name)
            template.created_at = base + timedelta(days=offset)
        db.commit()

        assert [t.name for t in store.list(company.id)] == ["Newest", "Middle", "Oldest"]

    def test_list_only_returns_company_templates(self, store, company, other_company):
        _upload(store, company, name="Ours")
        _upload(store, other_company, name="Theirs")

        assert [t.name for t in store.list(company.id)] == ["Ours"]

    def test_get_checks_company(self, store, company, other_company):
        theirs = _upload(store, other_company)
        with pytest.raises(NotFoundError):
            store.get(company.id, theirs.id)


class TestVersioningAndDelete:

    def test_replace_content_bumps_version(self, store, company):
        template = _upload(store, company)
        new_content = make_docx("Revised {{firstName}}")

        updated = store.replace_content(company.id, template.id, new_content, uploaded_by="user-2",
                                        file_name="revised.docx")

        assert updated.id == template.id
        assert updated.version == 2
        assert updated.content == new_content
        assert updated.file_name == "revised.docx"
        assert updated.uploaded_by == "user-2"

    def test_replace_content_requires_content(self, store, company):
        template = _upload(store, company)
        with pytest.raises(ValidationError):
            store.replace_content(company.id, template.id, b"", uploaded_by="user-1")

    def test_delete_unreferenced_template(self, store, company):
        template = _upload(store, company)
        store.delete(company.id, template.id)

        with pytest.raises(NotFoundError):
            store.get(company.id, template.id)

    def test_referenced_template_is_kept(self, store, company, employee, db):
        template = _upload(store, company)
        db.add(Contract(
            employee_id=employee.id,
            company_id=company.id,
            template_id=template.id,
            template_name=template.name,
            file_name="Jane_Doe_Contract.docx",
            content=b"PK...",
        ))
        db.commit()

        with pytest.raises(ValidationError):
            store.delete(company.id, template.id)
        assert store.get(company.id, template.id)

"""Tests for the Database wrapper and the table definitions."""
import uuid

import pytest
from sqlalchemy import inspect, text
from sqlalchemy.exc import IntegrityError

from galleryblue.core.database import Database
from galleryblue.core.settings import DatabaseSettings
from galleryblue.database import repository
from galleryblue.database.models import Image, User
from tests.helpers import create_test_image, create_test_user


class TestDatabase:

    def test_tables_created(self, database):
        tables = set(inspect(database.engine).get_table_names())
        assert {"users", "images"} <= tables

    def test_ping(self, database):
        assert database.ping() is True

    def test_ping_failure(self, tmp_path):
        db = Database(f"sqlite:///{tmp_path}/missing-dir/x.db")
        assert db.ping() is False
        db.dispose()

    def test_sqlite_foreign_keys_enforced(self, database):
        with database.engine.connect() as conn:
            assert conn.execute(text("PRAGMA foreign_keys")).scalar() == 1

    def test_from_settings_sqlite(self, monkeypatch, tmp_path):
        monkeypatch.setenv("DATABASE_URL", f"sqlite:///{tmp_path}/gallery.db")
        db = Database.from_settings(DatabaseSettings())
        db.create_all()
        assert db.ping() is True
        db.dispose()


class TestModels:

    def test_user_id_is_uuid(self, db_session):
        user = create_test_user(db_session)
        assert uuid.UUID(user.id)
        assert user.created_at is not None

    def test_email_unique(self, db_session):
        create_test_user(db_session, email="dup@example.com")
        with pytest.raises(IntegrityError):
            create_test_user(db_session, email="dup@example.com")
        db_session.rollback()

    def test_display_name_unique(self, db_session):
        create_test_user(db_session, display_name="ada")
        with pytest.raises(IntegrityError):
            create_test_user(db_session, display_name="ada")
        db_session.rollback()

    def test_null_display_names_do_not_collide(self, db_session):
        create_test_user(db_session, display_name=None)
        create_test_user(db_session, display_name=None)
        assert db_session.query(User).count() == 2

    def test_image_belongs_to_owner(self, db_session):
        owner = create_test_user(db_session)
        image = create_test_image(db_session, owner)
        assert image.owner.id == owner.id
        assert [i.id for i in owner.images] == [image.id]

    def test_image_requires_data(self, db_session):
        owner = create_test_user(db_session)
        db_session.add(Image(owner_id=owner.id, filename="a.jpg", content_type="image/jpeg", data=None))
        with pytest.raises(IntegrityError):
            db_session.commit()
        db_session.rollback()

    def test_image_requires_existing_owner(self, db_session):
        with pytest.raises(IntegrityError):
            repository.create_image(
                db_session,
                owner_id="no-such-user",
                filename="orphan.jpg",
                content_type="image/jpeg",
                data=b"\xff\xd8\xff",
                thumbnail=None,
                title=None,
                description=None,
            )
        assert db_session.query(Image).count() == 0

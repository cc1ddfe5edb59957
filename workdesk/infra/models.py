from __future__ import annotations

from sqlalchemy import JSON, Boolean, Column, DateTime, Integer, String, Text

from .db import Base


class UserModel(Base):
    __tablename__ = "users"

    id = Column(String(64), primary_key=True)
    username = Column(String(100), nullable=False, unique=True)
    password = Column(String(255), nullable=False, default="")
    is_first_login = Column(Boolean, nullable=False, default=False)
    full_name = Column(String(200), nullable=False, default="")
    role = Column(String(20), nullable=False, index=True)
    avatar_url = Column(Text, nullable=True)
    position = Column(Integer, nullable=False, default=0)


class TaskModel(Base):
    __tablename__ = "tasks"

    id = Column(String(64), primary_key=True)
    title = Column(String(500), nullable=False)
    description = Column(Text, nullable=False, default="")
    proposal = Column(Text, nullable=True)
    is_proposal_read = Column(Boolean, nullable=False, default=False)
    response_type = Column(String(20), nullable=True)
    response_content = Column(Text, nullable=True)
    responded_at = Column(DateTime(timezone=True), nullable=True)
    dispatch_number = Column(String(100), nullable=True)
    issuing_authority = Column(String(200), nullable=True)
    issue_date = Column(String(20), nullable=True)
    recurring = Column(String(20), nullable=False, default="NONE")
    assignee_id = Column(String(64), nullable=False, index=True)
    creator_id = Column(String(64), nullable=False)
    status = Column(String(20), nullable=False, index=True)
    priority = Column(String(20), nullable=False)
    due_date = Column(DateTime(timezone=True), nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False)
    suggested_steps = Column(JSON, nullable=False, default=list)
    position = Column(Integer, nullable=False, default=0)


class NotificationModel(Base):
    __tablename__ = "notifications"

    id = Column(String(64), primary_key=True)
    user_id = Column(String(64), nullable=False, index=True)
    title = Column(String(200), nullable=False)
    message = Column(Text, nullable=False, default="")
    is_read = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime(timezone=True), nullable=False)
    type = Column(String(30), nullable=False)
    task_id = Column(String(64), nullable=True)
    position = Column(Integer, nullable=False, default=0)


class SeededCollectionModel(Base):
    __tablename__ = "seeded_collections"

    name = Column(String(30), primary_key=True)

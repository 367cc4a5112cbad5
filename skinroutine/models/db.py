"""
SQLAlchemy models — one table per entity.

Sequences (concerns, steps, allergens, …) are JSON columns; ownership links are
plain foreign keys without cascades across entity types.
"""

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, JSON, String, Text
from sqlalchemy.sql import func

from skinroutine.database import Base


class User(Base):
    __tablename__ = "users"

    id = Column(String(36), primary_key=True)
    username = Column(String(100), unique=True, nullable=False, index=True)
    email = Column(String(255), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)
    allergies = Column(JSON, default=list)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    def __repr__(self):
        return f"<User(id={self.id}, username={self.username})>"


class Assessment(Base):
    __tablename__ = "assessments"

    id = Column(String(36), primary_key=True)
    user_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    skin_type = Column(String(20), nullable=False)
    concerns = Column(JSON, nullable=False)
    age_range = Column(String(20), nullable=False)
    budget = Column(String(50), nullable=False)
    time_available = Column(String(20), nullable=False)
    lifestyle = Column(JSON, default=dict)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    def __repr__(self):
        return f"<Assessment(id={self.id}, skin_type={self.skin_type})>"


class Routine(Base):
    __tablename__ = "routines"

    id = Column(String(36), primary_key=True)
    user_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    assessment_id = Column(String(36), ForeignKey("assessments.id"), nullable=False)
    name = Column(String(200), nullable=False)
    season = Column(String(10), nullable=False)
    preference_type = Column(String(20), nullable=False)
    morning_steps = Column(JSON, nullable=False)
    evening_steps = Column(JSON, nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    def __repr__(self):
        return f"<Routine(id={self.id}, active={self.is_active})>"


class Product(Base):
    __tablename__ = "products"

    id = Column(String(36), primary_key=True)
    name = Column(String(200), nullable=False)
    brand = Column(String(100), nullable=False)
    category = Column(String(50), nullable=False, index=True)
    skin_types = Column(JSON, nullable=False)
    concerns = Column(JSON, nullable=False)
    ingredients = Column(JSON, nullable=False)
    price = Column(Integer)
    rating = Column(Integer)
    is_home_remedy = Column(Boolean, default=False, nullable=False)
    instructions = Column(Text)
    warnings = Column(JSON, default=list)

    def __repr__(self):
        return f"<Product(id={self.id}, name={self.name})>"


class Ingredient(Base):
    __tablename__ = "ingredients"

    id = Column(String(36), primary_key=True)
    name = Column(String(200), nullable=False)
    name_key = Column(String(200), unique=True, nullable=False, index=True)  # lower(name)
    description = Column(Text)
    benefits = Column(JSON, default=list)
    warnings = Column(JSON, default=list)
    safety_level = Column(String(10), nullable=False)
    common_allergens = Column(JSON, default=list)

    def __repr__(self):
        return f"<Ingredient(id={self.id}, name={self.name})>"

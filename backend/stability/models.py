from __future__ import annotations
from datetime import datetime
from sqlalchemy import Column, String, DateTime, Integer, Float
from .db import Base


class SurveyResponse(Base):
	__tablename__ = "survey_responses"
	id = Column(Integer, primary_key=True, autoincrement=True)
	age_range = Column(String(16), nullable=True, index=True)
	region = Column(String(32), nullable=True, index=True)
	immigration_policy_rate = Column(Float, nullable=False)
	economic_management_rate = Column(Float, nullable=False)
	foreign_policy_rate = Column(Float, nullable=False)
	domestic_policy_rate = Column(Float, nullable=False)
	social_policy_rate = Column(Float, nullable=False)
	# Composite score of the submission
	instability_ratio = Column(Float, nullable=False)
	# Contact fields, filled in later when the respondent asks for the report
	first_name = Column(String(128), nullable=True)
	last_name = Column(String(128), nullable=True)
	email = Column(String(256), nullable=True)
	created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
	updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

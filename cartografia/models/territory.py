# cartografia/models/territory.py
from sqlalchemy import Column, Integer, String, Float, Boolean, DateTime, Text
from geoalchemy2 import Geometry
from cartografia.core.database import Base

class Area(Base):
    __tablename__ = "areas"

    id = Column(String, primary_key=True, index=True)
    community_name = Column(String, index=True, nullable=False)
    area_type = Column(String, nullable=False)
    display_name = Column(String, nullable=False)

    # WKT exatamente como o cliente gravou (compatível byte a byte com a planilha)
    geometry = Column(Text, nullable=False, default="")
    # Cópia espacial derivada do WKT, só quando o anel é bem formado
    geom = Column(Geometry("POLYGON", srid=4326, spatial_index=True), nullable=True)

    last_update = Column(DateTime(timezone=True), nullable=True)
    editor_username = Column(String, nullable=True)

    # Geografia política
    state = Column(String, nullable=True)
    municipality = Column(String, nullable=True)
    parish = Column(String, nullable=True)

class Household(Base):
    __tablename__ = "households"

    id = Column(String, primary_key=True, index=True)
    community_name = Column(String, index=True, nullable=False)
    member_count = Column(Integer, nullable=False, default=0)

    latitude = Column(Float, nullable=True)
    longitude = Column(Float, nullable=True)
    geom = Column(Geometry("POINT", srid=4326, spatial_index=True), nullable=True)

    head_name = Column(String, nullable=True)
    wall_material = Column(String, nullable=True)
    landslide_risk = Column(Boolean, nullable=False, default=False)

    # Geografia política
    state = Column(String, nullable=True)
    municipality = Column(String, nullable=True)
    parish = Column(String, nullable=True)

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, func
from sqlalchemy.orm import relationship
from .base import Base, generate_uuid


class TipeGambar(Base):
     """Image type/theme (e.g. depan, kamar, kamar_mandi)."""
     __tablename__ = "tipe_gambar"

     id = Column(Integer, primary_key=True, autoincrement=True)
     name = Column(String(100), unique=True, nullable=False)

     images = relationship("GambarKos", back_populates="tipe_gambar")

     def __repr__(self):
          return f"<TipeGambar(id={self.id}, name='{self.name}')>"


class GambarKos(Base):
     """
     Listing image. nama_file is the blob object name, url_gambar
     the public URL returned by storage.
     """
     __tablename__ = "gambar_kos"

     id = Column(String(36), primary_key=True, default=generate_uuid)
     kos_id = Column(String(36), ForeignKey("kos.id", ondelete="CASCADE"), nullable=False, index=True)
     tipe_gambar_id = Column(Integer, ForeignKey("tipe_gambar.id"), nullable=True)
     nama_file = Column(String(500), nullable=False)
     url_gambar = Column(String(1000), nullable=False)
     created_at = Column(DateTime, server_default=func.now(), nullable=False)

     kos = relationship("Kos", back_populates="images")
     tipe_gambar = relationship("TipeGambar", back_populates="images")

     def __repr__(self):
          return f"<GambarKos(id={self.id}, kos_id={self.kos_id})>"

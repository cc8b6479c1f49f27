"""Master-data tables: employee records, roles and the menu forms."""

from __future__ import annotations

from sqlalchemy import ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .models import Base


class APD(Base):
    __tablename__ = "apds"

    ukuran_baju: Mapped[str] = mapped_column(default="")
    ukuran_celana: Mapped[str] = mapped_column(default="")
    ukuran_sepatu: Mapped[str] = mapped_column(default="")


class Bank(Base):
    __tablename__ = "banks"

    nama_bank: Mapped[str] = mapped_column(default="")
    nomor_rekening: Mapped[str] = mapped_column(default="")
    nama_pemilik_bank: Mapped[str] = mapped_column(default="")


class BPJSKesehatan(Base):
    __tablename__ = "bpjs_kesehatans"

    nomor_kesehatan: Mapped[str] = mapped_column(default="")


class BPJSKetenagakerjaan(Base):
    __tablename__ = "bpjs_ketenagakerjaans"

    nomor_ketenagakerjaan: Mapped[str] = mapped_column(default="")


class Department(Base):
    __tablename__ = "departments"

    department_name: Mapped[str] = mapped_column(default="")


class Position(Base):
    __tablename__ = "positions"

    position_name: Mapped[str] = mapped_column(default="")


class Role(Base):
    __tablename__ = "roles"

    name: Mapped[str] = mapped_column(default="")


class DepartmentForm(Base):
    __tablename__ = "department_forms"

    department_id: Mapped[int] = mapped_column(ForeignKey("departments.id"))
    role_id: Mapped[int] = mapped_column(ForeignKey("roles.id"))

    department: Mapped[Department] = relationship()
    role: Mapped[Role] = relationship()


class DOH(Base):
    """Date of hire and contract of an employee."""

    __tablename__ = "dohs"

    employee_id: Mapped[int] = mapped_column(default=0)
    tanggal_doh: Mapped[str] = mapped_column(default="")
    tanggal_end_doh: Mapped[str] = mapped_column(default="")
    pt: Mapped[str] = mapped_column(default="")
    penempatan: Mapped[str] = mapped_column(default="")
    status_kontrak: Mapped[str] = mapped_column(default="")


class Form(Base):
    """A menu entry; entries without a path only group their children."""

    __tablename__ = "forms"

    form_name: Mapped[str] = mapped_column(default="")
    path: Mapped[str | None] = mapped_column(default=None)
    parent_id: Mapped[int | None] = mapped_column(ForeignKey("forms.id"), default=None)
    sequence: Mapped[int] = mapped_column(default=0)
    create_flag: Mapped[bool] = mapped_column(default=False)
    update_flag: Mapped[bool] = mapped_column(default=False)
    read_flag: Mapped[bool] = mapped_column(default=False)
    delete_flag: Mapped[bool] = mapped_column(default=False)

    children: Mapped[list[Form]] = relationship()


class History(Base):
    __tablename__ = "histories"

    employee_id: Mapped[int] = mapped_column(default=0)
    status_terakhir: Mapped[str] = mapped_column(default="")
    tanggal: Mapped[str] = mapped_column(default="")
    keterangan: Mapped[str] = mapped_column(default="")


class Jabatan(Base):
    __tablename__ = "jabatans"

    employee_id: Mapped[int] = mapped_column(default=0)
    date_move: Mapped[str] = mapped_column(default="")
    position_id: Mapped[int] = mapped_column(ForeignKey("positions.id"))

    position: Mapped[Position] = relationship()


class KartuKeluarga(Base):
    __tablename__ = "kartu_keluargas"

    nomor_kartu_keluarga: Mapped[str] = mapped_column(default="")
    nama_ibu_kandung: Mapped[str] = mapped_column(default="")
    kontak_darurat: Mapped[str] = mapped_column(default="")
    nama_kontak_darurat: Mapped[str] = mapped_column(default="")
    hubungan_kontak_darurat: Mapped[str] = mapped_column(default="")


class KTP(Base):
    __tablename__ = "ktps"

    nama_sesuai_ktp: Mapped[str] = mapped_column(default="")
    nomor_ktp: Mapped[str] = mapped_column(default="")
    tempat_lahir: Mapped[str] = mapped_column(default="")
    tanggal_lahir: Mapped[str] = mapped_column(default="")
    gender: Mapped[str] = mapped_column(default="")
    alamat: Mapped[str] = mapped_column(default="")
    rt: Mapped[str] = mapped_column(default="")
    rw: Mapped[str] = mapped_column(default="")
    kelurahan: Mapped[str] = mapped_column("kel", default="")
    kecamatan: Mapped[str] = mapped_column("kec", default="")
    kota: Mapped[str] = mapped_column(default="")
    provinsi: Mapped[str] = mapped_column("prov", default="")
    kode_pos: Mapped[str] = mapped_column(default="")
    golongan_darah: Mapped[str] = mapped_column(default="")
    agama: Mapped[str] = mapped_column(default="")
    ring_ktp: Mapped[str] = mapped_column(default="")


class Laporan(Base):
    __tablename__ = "laporans"

    ring_serapan: Mapped[str] = mapped_column(default="")
    ring_rippm: Mapped[str] = mapped_column(default="")
    kategori_laporan_twiwulan: Mapped[str] = mapped_column(default="")
    kategori_lokal_non_lokal: Mapped[str] = mapped_column(default="")
    rekomendasi: Mapped[str] = mapped_column(default="")


class MCU(Base):
    """A medical check-up of an employee."""

    __tablename__ = "mcus"

    employee_id: Mapped[int] = mapped_column(default=0)
    date_mcu: Mapped[str] = mapped_column(default="")
    date_end_mcu: Mapped[str] = mapped_column(default="")
    hasil_mcu: Mapped[str] = mapped_column(default="")
    mcu: Mapped[str] = mapped_column(default="")


class NPWP(Base):
    __tablename__ = "npwps"

    nomor_npwp: Mapped[str | None] = mapped_column(default=None)
    status_pajak: Mapped[str] = mapped_column(default="")


class Pendidikan(Base):
    __tablename__ = "pendidikans"

    pendidikan_label: Mapped[str] = mapped_column(default="")
    pendidikan_terakhir: Mapped[str] = mapped_column(default="")
    jurusan: Mapped[str] = mapped_column(default="")


class RoleForm(Base):
    __tablename__ = "role_forms"

    department_form_id: Mapped[int] = mapped_column(default=0)
    form_id: Mapped[int] = mapped_column(default=0)
    create_flag: Mapped[bool] = mapped_column(default=False)
    update_flag: Mapped[bool] = mapped_column(default=False)
    read_flag: Mapped[bool] = mapped_column(default=False)
    delete_flag: Mapped[bool] = mapped_column(default=False)


class Sertifikat(Base):
    __tablename__ = "sertifikats"

    employee_id: Mapped[int] = mapped_column(default=0)
    date_effective: Mapped[str] = mapped_column(default="")
    sertifikat: Mapped[str] = mapped_column(default="")
    remark: Mapped[str] = mapped_column(default="")


class UserRole(Base):
    __tablename__ = "user_roles"

    user_id: Mapped[int] = mapped_column(default=0)
    role_id: Mapped[int] = mapped_column(ForeignKey("roles.id"))
    department_id: Mapped[int] = mapped_column(ForeignKey("departments.id"))

    role: Mapped[Role] = relationship()
    department: Mapped[Department] = relationship()
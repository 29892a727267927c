import enum

from .extensions import db


class RoleId(enum.IntEnum):
    ADMIN = 1
    GUEST = 2


class Role(db.Model):
    __tablename__ = "roles"

    id = db.Column(db.Integer, primary_key=True, autoincrement=False)
    name = db.Column(db.String(50), nullable=False)


class User(db.Model):
    __tablename__ = "users"

    id = db.Column(db.Integer, primary_key=True)
    username = db.Column(db.String(15), unique=True, nullable=False)
    password = db.Column(db.String(255), nullable=False)
    role_id = db.Column(db.Integer, db.ForeignKey('roles.id'), nullable=False, default=RoleId.GUEST.value)

    def to_dict(self):
        return {
            "id": self.id,
            "username": self.username,
            "role_id": self.role_id,
        }


class CarPart(db.Model):
    __tablename__ = "car_parts"

    # Part numbers are supplied by the caller, never generated
    part_number = db.Column(db.Integer, primary_key=True, autoincrement=False)
    name = db.Column(db.String(100), nullable=False)
    condition = db.Column(db.String(50), nullable=False, default="unknown")
    image = db.Column(db.String(2000))

    def to_dict(self):
        return {
            "part_number": self.part_number,
            "name": self.name,
            "condition": self.condition,
            "image": self.image,
        }


class Project(db.Model):
    __tablename__ = "projects"

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(50), nullable=False)
    description = db.Column(db.String(255))

    def to_dict(self):
        return {
            "project_id": self.id,
            "name": self.name,
            "description": self.description,
        }


class PartProject(db.Model):
    __tablename__ = "part_projects"

    project_id = db.Column(db.Integer, db.ForeignKey('projects.id'), primary_key=True)
    part_number = db.Column(db.Integer, db.ForeignKey('car_parts.part_number'), primary_key=True)


class UserProject(db.Model):
    __tablename__ = "user_projects"

    project_id = db.Column(db.Integer, db.ForeignKey('projects.id'), primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey('users.id'), primary_key=True)

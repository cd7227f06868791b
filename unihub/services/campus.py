"""
Campus stores: events, shared resources, mentorship requests, the academic
calendar and the department directory.

These are plain create/list records scoped by department or course. Each
listing joins in the usernames and department names the UI shows.
"""
from datetime import date, datetime
from typing import List, Optional, Union

from sqlalchemy import or_, select, update
from sqlalchemy.orm import aliased

from ..database import insert_if_absent, transaction
from ..exceptions import NotAuthorized, NotFound, ValidationError
from ..logging_config import feed_logger
from ..models.calendar import CalendarEntry
from ..models.department import DEFAULT_DEPARTMENTS, Department
from ..models.event import Event
from ..models.mentorship import Mentorship, MentorshipStatus
from ..models.resource import Resource
from ..models.user import User
from ..permissions import Capability, Role, has_capability, require_capability
from ..schemas.campus import (
    CalendarEntryResponse,
    DepartmentResponse,
    EventResponse,
    MentorshipResponse,
    ResourceResponse,
)
from .base import Store, clean, enum_value, require_text


class DepartmentDirectory(Store):

    def seed(self) -> int:
        """Insert the default departments that are not there yet."""
        rows = [
            {"name": name, "code": code, "description": description}
            for name, code, description in DEFAULT_DEPARTMENTS
        ]
        with self.storage("seed departments"):
            with transaction(self.db):
                return insert_if_absent(self.db, Department, rows, index_elements=["code"])

    def list(self) -> List[DepartmentResponse]:
        with self.storage("list departments"):
            departments = self.db.query(Department).order_by(Department.name).all()
        return [DepartmentResponse.model_validate(d) for d in departments]


class EventStore(Store):

    def create(
        self,
        organizer_id: int,
        title: Optional[str],
        description: Optional[str] = None,
        event_type: Optional[str] = None,
        department_id: Optional[int] = None,
        event_date: Optional[datetime] = None,
        location: Optional[str] = None,
        is_public: bool = True,
    ) -> int:
        title = require_text(title, "title")
        self.check_department(department_id)
        with self.storage("create event", organizer_id=organizer_id):
            with transaction(self.db):
                event = Event(
                    title=title,
                    description=clean(description),
                    event_type=clean(event_type),
                    department_id=department_id,
                    organizer_id=organizer_id,
                    event_date=event_date,
                    location=clean(location),
                    is_public=is_public,
                )
                self.db.add(event)
                self.db.flush()
                event_id = event.id
        feed_logger.info("Event created", event_id=event_id, organizer_id=organizer_id)
        return event_id

    def list(self, department_id: Optional[int] = None, event_type: Optional[str] = None) -> List[EventResponse]:
        """Public events, soonest first."""
        stmt = (
            select(
                Event,
                User.username.label("organizer_name"),
                Department.name.label("department_name"),
            )
            .join(User, User.id == Event.organizer_id)
            .outerjoin(Department, Department.id == Event.department_id)
            .where(Event.is_public.is_(True))
        )
        if department_id is not None:
            stmt = stmt.where(Event.department_id == department_id)
        if event_type:
            stmt = stmt.where(Event.event_type == event_type)
        stmt = stmt.order_by(Event.event_date.asc(), Event.id.asc())

        with self.storage("list events"):
            rows = self.db.execute(stmt).all()
        return [
            EventResponse(
                id=event.id,
                title=event.title,
                description=event.description,
                event_type=event.event_type,
                department_id=event.department_id,
                organizer_id=event.organizer_id,
                organizer_name=organizer_name,
                department_name=department_name,
                event_date=event.event_date,
                location=event.location,
                is_public=event.is_public,
                created_at=event.created_at,
            )
            for event, organizer_name, department_name in rows
        ]


class ResourceStore(Store):
    """
    Shared study material. Resources from faculty and staff are approved on
    upload; student uploads wait for approval but stay visible to their
    uploader.
    """

    def create(
        self,
        uploader_id: int,
        uploader_role: Optional[Union[str, Role]],
        title: Optional[str],
        description: Optional[str] = None,
        resource_type: Optional[str] = None,
        file_url: Optional[str] = None,
        course_code: Optional[str] = None,
        department_id: Optional[int] = None,
    ) -> int:
        title = require_text(title, "title")
        self.check_department(department_id)
        with self.storage("share resource", uploader_id=uploader_id):
            with transaction(self.db):
                resource = Resource(
                    title=title,
                    description=clean(description),
                    resource_type=clean(resource_type),
                    file_url=clean(file_url),
                    course_code=clean(course_code),
                    department_id=department_id,
                    uploader_id=uploader_id,
                    is_approved=has_capability(uploader_role, Capability.APPROVE_RESOURCES),
                )
                self.db.add(resource)
                self.db.flush()
                resource_id = resource.id
        feed_logger.info("Resource shared", resource_id=resource_id, uploader_id=uploader_id)
        return resource_id

    def list(
        self,
        viewer_id: int,
        department_id: Optional[int] = None,
        course_code: Optional[str] = None,
        resource_type: Optional[str] = None,
    ) -> List[ResourceResponse]:
        stmt = self._visible_to(viewer_id)
        if department_id is not None:
            stmt = stmt.where(Resource.department_id == department_id)
        if course_code:
            stmt = stmt.where(Resource.course_code == course_code)
        if resource_type:
            stmt = stmt.where(Resource.resource_type == resource_type)
        stmt = stmt.order_by(Resource.created_at.desc(), Resource.id.desc())

        with self.storage("list resources"):
            rows = self.db.execute(stmt).all()
        return [self._to_response(*row) for row in rows]

    def approve(self, resource_id: int, approver_role: Optional[Union[str, Role]]) -> ResourceResponse:
        require_capability(approver_role, Capability.APPROVE_RESOURCES)
        with self.storage("approve resource", resource_id=resource_id):
            with transaction(self.db):
                result = self.db.execute(
                    update(Resource)
                    .where(Resource.id == resource_id)
                    .values(is_approved=True)
                    .execution_options(synchronize_session=False)
                )
        if result.rowcount == 0:
            raise NotFound("Resource", resource_id)
        feed_logger.info("Resource approved", resource_id=resource_id)
        return self.get(resource_id)

    def record_download(self, resource_id: int, viewer_id: int) -> ResourceResponse:
        """Count a download of a resource the viewer is allowed to see."""
        visible = or_(Resource.is_approved.is_(True), Resource.uploader_id == viewer_id)
        with self.storage("record download", resource_id=resource_id):
            with transaction(self.db):
                result = self.db.execute(
                    update(Resource)
                    .where(Resource.id == resource_id, visible)
                    .values(download_count=Resource.download_count + 1)
                    .execution_options(synchronize_session=False)
                )
        if result.rowcount == 0:
            raise NotFound("Resource", resource_id)
        return self.get(resource_id)

    def get(self, resource_id: int) -> ResourceResponse:
        stmt = self._query().where(Resource.id == resource_id)
        with self.storage("get resource", resource_id=resource_id):
            row = self.db.execute(stmt).first()
        if row is None:
            raise NotFound("Resource", resource_id)
        return self._to_response(*row)

    def _query(self):
        return (
            select(
                Resource,
                User.username.label("uploader_name"),
                Department.name.label("department_name"),
            )
            .join(User, User.id == Resource.uploader_id)
            .outerjoin(Department, Department.id == Resource.department_id)
        )

    def _visible_to(self, viewer_id: int):
        return self._query().where(
            or_(Resource.is_approved.is_(True), Resource.uploader_id == viewer_id)
        )

    @staticmethod
    def _to_response(resource: Resource, uploader_name: str, department_name: Optional[str]) -> ResourceResponse:
        return ResourceResponse(
            id=resource.id,
            title=resource.title,
            description=resource.description,
            resource_type=resource.resource_type,
            file_url=resource.file_url,
            course_code=resource.course_code,
            department_id=resource.department_id,
            uploader_id=resource.uploader_id,
            uploader_name=uploader_name,
            department_name=department_name,
            is_approved=resource.is_approved,
            download_count=resource.download_count,
            created_at=resource.created_at,
        )


class MentorshipStore(Store):

    def request(
        self,
        mentee_id: int,
        mentor_id: int,
        subject_area: Optional[str] = None,
        message: Optional[str] = None,
    ) -> int:
        if mentor_id == mentee_id:
            raise ValidationError("You cannot request mentorship from yourself", field="mentor_id")
        self.require_user(mentor_id)
        with self.storage("request mentorship", mentee_id=mentee_id, mentor_id=mentor_id):
            with transaction(self.db):
                request = Mentorship(
                    mentor_id=mentor_id,
                    mentee_id=mentee_id,
                    subject_area=clean(subject_area),
                    message=clean(message),
                )
                self.db.add(request)
                self.db.flush()
                request_id = request.id
        feed_logger.info("Mentorship requested", mentorship_id=request_id, mentor_id=mentor_id, mentee_id=mentee_id)
        return request_id

    def respond(self, mentorship_id: int, user_id: int, status: Optional[str]) -> MentorshipResponse:
        """Accept or decline a pending request; only the mentor may answer."""
        status = enum_value(MentorshipStatus, status, MentorshipStatus.PENDING, "status")
        if status == MentorshipStatus.PENDING.value:
            raise ValidationError("Status must be accepted or declined", field="status")

        with self.storage("respond to mentorship", mentorship_id=mentorship_id):
            current = self.db.execute(
                select(Mentorship.mentor_id, Mentorship.status).where(Mentorship.id == mentorship_id)
            ).first()
        if current is None:
            raise NotFound("Mentorship request", mentorship_id)
        if current.mentor_id != user_id:
            raise NotAuthorized("Only the requested mentor can respond")

        with self.storage("respond to mentorship", mentorship_id=mentorship_id):
            with transaction(self.db):
                result = self.db.execute(
                    update(Mentorship)
                    .where(
                        Mentorship.id == mentorship_id,
                        Mentorship.status == MentorshipStatus.PENDING.value,
                    )
                    .values(status=status)
                    .execution_options(synchronize_session=False)
                )
        if result.rowcount == 0:
            raise ValidationError("Mentorship request was already answered", field="status")
        return self.get(mentorship_id)

    def list_for_user(self, user_id: int) -> List[MentorshipResponse]:
        """Requests where the user is mentor or mentee, newest first."""
        stmt = self._query().where(
            or_(Mentorship.mentor_id == user_id, Mentorship.mentee_id == user_id)
        ).order_by(Mentorship.created_at.desc(), Mentorship.id.desc())
        with self.storage("list mentorship", user_id=user_id):
            rows = self.db.execute(stmt).all()
        return [self._to_response(*row) for row in rows]

    def get(self, mentorship_id: int) -> MentorshipResponse:
        with self.storage("get mentorship", mentorship_id=mentorship_id):
            row = self.db.execute(self._query().where(Mentorship.id == mentorship_id)).first()
        if row is None:
            raise NotFound("Mentorship request", mentorship_id)
        return self._to_response(*row)

    @staticmethod
    def _query():
        mentor = aliased(User)
        mentee = aliased(User)
        return (
            select(
                Mentorship,
                mentor.username.label("mentor_name"),
                mentor.role.label("mentor_role"),
                mentee.username.label("mentee_name"),
                mentee.role.label("mentee_role"),
            )
            .join(mentor, mentor.id == Mentorship.mentor_id)
            .join(mentee, mentee.id == Mentorship.mentee_id)
        )

    @staticmethod
    def _to_response(request: Mentorship, mentor_name, mentor_role, mentee_name, mentee_role) -> MentorshipResponse:
        return MentorshipResponse(
            id=request.id,
            mentor_id=request.mentor_id,
            mentee_id=request.mentee_id,
            mentor_name=mentor_name,
            mentor_role=mentor_role,
            mentee_name=mentee_name,
            mentee_role=mentee_role,
            subject_area=request.subject_area,
            status=request.status,
            message=request.message,
            created_at=request.created_at,
        )


class CalendarStore(Store):

    def create(
        self,
        user_id: int,
        role: Optional[Union[str, Role]],
        title: Optional[str],
        description: Optional[str] = None,
        event_type: Optional[str] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        department_id: Optional[int] = None,
        is_important: bool = False,
    ) -> int:
        require_capability(role, Capability.MANAGE_CALENDAR)
        title = require_text(title, "title")
        if start_date and end_date and end_date < start_date:
            raise ValidationError("End date cannot be before start date", field="end_date")
        self.check_department(department_id)

        with self.storage("add calendar event", user_id=user_id):
            with transaction(self.db):
                entry = CalendarEntry(
                    title=title,
                    description=clean(description),
                    event_type=clean(event_type),
                    start_date=start_date,
                    end_date=end_date,
                    department_id=department_id,
                    is_important=is_important,
                    created_by=user_id,
                )
                self.db.add(entry)
                self.db.flush()
                entry_id = entry.id
        feed_logger.info("Calendar event added", entry_id=entry_id, created_by=user_id)
        return entry_id

    def list(self, department_id: Optional[int] = None, event_type: Optional[str] = None) -> List[CalendarEntryResponse]:
        stmt = (
            select(
                CalendarEntry,
                User.username.label("created_by_name"),
                Department.name.label("department_name"),
            )
            .join(User, User.id == CalendarEntry.created_by)
            .outerjoin(Department, Department.id == CalendarEntry.department_id)
        )
        if department_id is not None:
            stmt = stmt.where(CalendarEntry.department_id == department_id)
        if event_type:
            stmt = stmt.where(CalendarEntry.event_type == event_type)
        stmt = stmt.order_by(CalendarEntry.start_date.asc(), CalendarEntry.id.asc())

        with self.storage("list calendar"):
            rows = self.db.execute(stmt).all()
        return [
            CalendarEntryResponse(
                id=entry.id,
                title=entry.title,
                description=entry.description,
                event_type=entry.event_type,
                start_date=entry.start_date,
                end_date=entry.end_date,
                department_id=entry.department_id,
                department_name=department_name,
                is_important=entry.is_important,
                created_by=entry.created_by,
                created_by_name=created_by_name,
                created_at=entry.created_at,
            )
            for entry, created_by_name, department_name in rows
        ]

from unihub.auth import get_password_hash
from unihub.database import SessionLocal, engine, Base
from unihub.models import CalendarEntry, Comment, Event, Like, Mentorship, Post, PostTag, Resource, User
from unihub.services import DepartmentDirectory, FeedEngine

# Create tables
Base.metadata.create_all(bind=engine)

db = SessionLocal()

# Clear existing data
db.query(Like).delete()
db.query(CalendarEntry).delete()
db.query(Event).delete()
db.query(Mentorship).delete()
db.query(Resource).delete()
db.query(Comment).delete()
db.query(PostTag).delete()
db.query(Post).delete()
db.query(User).delete()
db.commit()

DepartmentDirectory(db).seed()
departments = {d.code: d.id for d in DepartmentDirectory(db).list()}

users = [
    User(
        username="prof_rahman",
        email="rahman@university.edu",
        hashed_password=get_password_hash("password123"),
        role="faculty",
        department_id=departments["CSE"],
    ),
    User(
        username="nadia",
        email="nadia@university.edu",
        hashed_password=get_password_hash("password123"),
        role="student",
        department_id=departments["CSE"],
        student_id="2021-1-60-001",
        year_of_study=3,
    ),
    User(
        username="tanvir",
        email="tanvir@university.edu",
        hashed_password=get_password_hash("password123"),
        role="student",
        department_id=departments["BBA"],
        student_id="2022-2-10-045",
        year_of_study=2,
    ),
]
db.add_all(users)
db.commit()
faculty, nadia, tanvir = users

feed = FeedEngine(db)
announcement = feed.posts.create(
    author_id=faculty.id,
    content="Midterm for CSE220 moves to Thursday, room 301.",
    post_type="announcement",
    department_id=departments["CSE"],
    course_code="CSE220",
    priority="high",
    tags_csv="exam, cse220",
    author_role=faculty.role,
)
question = feed.posts.create(
    author_id=nadia.id,
    content="Anyone have notes on red-black tree deletion?",
    post_type="discussion",
    department_id=departments["CSE"],
    course_code="CSE220",
    tags_csv="data-structures,help",
)
feed.posts.create(
    author_id=tanvir.id,
    content="Case competition team forming, DM me!",
    department_id=departments["BBA"],
    tags_csv="competition",
)

feed.interactions.like(nadia.id, announcement)
feed.interactions.like(tanvir.id, announcement)
feed.interactions.comment(faculty.id, question, "Check chapter 13 of CLRS.")

print("Database seeded successfully!")
print(f"  - {len(departments)} departments")
print(f"  - {len(users)} users")
print(f"  - {len(feed.feed.list())} posts")

db.close()

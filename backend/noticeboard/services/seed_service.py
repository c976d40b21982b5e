"""
演示数据
"""

from datetime import timedelta
from sqlalchemy.orm import Session
from noticeboard.core.utils import utcnow
from noticeboard.models.profile import Profile
from noticeboard.models.post import Post, PollOption
from noticeboard.models.submission import AnonymousSubmission

DEMO_PROFILES = [
    {"full_name": "Sarah Johnson", "email": "sarah.johnson@example.edu"},
    {"full_name": "Prof. Michael Chen", "email": "michael.chen@example.edu"},
    {"full_name": "Alex Kumar", "email": "alex.kumar@example.edu"},
]

DEMO_REPORTS = [
    {
        "category": "bullying",
        "content": "There's been ongoing harassment in the computer lab during evening hours. Students are being intimidated and their work is being disrupted. The issue has been happening for the past two weeks.",
        "urgency": "high",
        "status": "new",
        "age": timedelta(hours=2),
    },
    {
        "category": "mental-health",
        "content": "The exam pressure is becoming overwhelming. Many students are struggling with anxiety and there's limited counseling support available. We need more mental health resources.",
        "urgency": "medium",
        "status": "reviewed",
        "age": timedelta(days=1),
    },
]


def seed_demo_data(db: Session) -> bool:
    """数据库为空时写入演示数据，返回是否写入"""
    if db.query(Post).count() > 0 or db.query(AnonymousSubmission).count() > 0:
        print("✅ 数据库已有数据，跳过演示数据")
        return False

    now = utcnow()
    sarah, michael, alex = [Profile(**data) for data in DEMO_PROFILES]
    db.add_all([sarah, michael, alex])
    db.flush()

    db.add(Post(
        author_id=sarah.id,
        type="query",
        content="Can anyone explain the difference between async/await and promises in JavaScript? I'm preparing for my web development exam and getting confused between the two approaches.",
        likes_count=12,
        replies_count=3,
        created_at=now - timedelta(minutes=30),
    ))

    poll = Post(
        author_id=michael.id,
        type="poll",
        content="We're planning the schedule for next semester's programming courses. Which time slots work best for the majority of students?",
        poll_question="Which time slot do you prefer for programming classes?",
        likes_count=8,
        replies_count=15,
        created_at=now - timedelta(hours=2),
    )
    db.add(poll)
    db.flush()
    for position, (text, votes) in enumerate([
        ("Morning (9-11 AM)", 45),
        ("Afternoon (2-4 PM)", 32),
        ("Evening (6-8 PM)", 23),
    ]):
        db.add(PollOption(post_id=poll.id, option_text=text, position=position, votes_count=votes))

    db.add(Post(
        author_id=alex.id,
        type="query",
        content="Has anyone taken the Machine Learning elective with Dr. Rodriguez? How's the workload and what programming languages does she use in assignments?",
        likes_count=7,
        replies_count=8,
        created_at=now - timedelta(hours=4),
    ))

    for report in DEMO_REPORTS:
        created_at = now - report["age"]
        db.add(AnonymousSubmission(
            category=report["category"],
            content=report["content"],
            urgency=report["urgency"],
            status=report["status"],
            created_at=created_at,
            updated_at=created_at,
        ))

    db.commit()
    print("🌱 演示数据写入完成")
    return True

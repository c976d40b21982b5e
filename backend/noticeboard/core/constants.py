"""
公告板常量
"""

# 匿名提交分类
CATEGORIES = {
    "bullying": "Bullying/Harassment",
    "mental-health": "Mental Health",
    "academic": "Academic Issues",
    "safety": "Safety Concerns",
    "other": "Other",
}

URGENCIES = ("low", "medium", "high")
URGENCY_RANK = {"high": 3, "medium": 2, "low": 1}
DEFAULT_URGENCY = "medium"

STATUSES = ("new", "reviewed", "resolved")

POST_KINDS = ("query", "poll")

# 三个视图
TABS = ("feed", "anonymous", "admin")
ADMIN_TABS = ("admin",)

# 变更通知涉及的表
POST_TABLES = ("posts", "poll_options", "poll_votes", "post_likes")
SUBMISSION_TABLE = "anonymous_submissions"

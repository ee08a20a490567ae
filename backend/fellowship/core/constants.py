"""
Application constants for role definitions, enumerations, and limits.
"""

# Role constants (lowest to highest privilege)
ROLE_MEMBER = "MEMBER"
ROLE_FAMILY_LEADER = "FAMILY_LEADER"
ROLE_TEAM_LEADER = "TEAM_LEADER"
ROLE_GENERAL_LEADER = "GENERAL_LEADER"
ROLE_SUPER_ADMIN = "SUPER_ADMIN"

DEFAULT_ROLE = ROLE_MEMBER
DEFAULT_FELLOWSHIP_ROLE = "Member"

# Roles an invite code may grant
INVITE_ROLES = [
    ROLE_FAMILY_LEADER,
    ROLE_TEAM_LEADER,
    ROLE_GENERAL_LEADER,
    ROLE_SUPER_ADMIN,
]

# Roles allowed to organise events and handle mentorship
LEADER_ROLES = INVITE_ROLES
ADMIN_ROLES = [ROLE_SUPER_ADMIN]

# Posts
POST_TYPES = ["prayer", "testimony", "announcement", "celebration"]
TESTIMONY_CATEGORIES = [
    "Healing",
    "Provision",
    "Breakthrough",
    "Spiritual Growth",
    "Deliverance",
    "Other",
]
CELEBRATION_CATEGORIES = [
    "Birthday",
    "Graduation",
    "New Job",
    "Achievement",
    "Engagement",
    "Other",
]

# Reaction kinds
REACTION_LIKE = "like"
REACTION_PRAY = "pray"
REACTION_AMEN = "amen"
REACTION_BLESS = "bless"
REACTION_CONGRATS = "congrats"
REACTION_HEART = "heart"
CELEBRATION_REACTIONS = [REACTION_AMEN, REACTION_BLESS, REACTION_CONGRATS, REACTION_HEART]

# Prayer entries
PRAYER_TYPES = ["personal", "intercession", "thanksgiving", "request"]

# Events
EVENT_TYPES = ["bible-study", "worship", "outreach", "fellowship", "prayer", "other"]
DEFAULT_EVENT_TYPE = "fellowship"

# Notifications
NOTIFICATION_TYPES = [
    "like",
    "comment",
    "prayer",
    "rsvp",
    "mention",
    "event_reminder",
    "new_post",
    "new_event",
    "mentorship_submitted",
    "mentorship_updated",
    "mentorship_message",
]
NOTIFICATION_EVENT = "new_notification"

# Mentorship
MENTORSHIP_TOPICS = [
    "Spiritual Growth",
    "Academic Guidance",
    "Career",
    "Relationships",
    "Mental Health",
    "Other",
]
MENTORSHIP_STATUSES = ["pending", "accepted", "declined", "scheduled", "completed"]

# Scripture
RANDOM_VERSES = [
    "john+3:16",
    "philippians+4:13",
    "romans+8:28",
    "jeremiah+29:11",
    "psalm+23:1",
    "matthew+28:20",
    "isaiah+40:31",
    "proverbs+3:5-6",
]

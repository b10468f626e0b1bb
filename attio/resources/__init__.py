from attio.resources.attributes import Attribute
from attio.resources.base import APIResource, ResourceState
from attio.resources.comments import Comment
from attio.resources.companies import Company
from attio.resources.deals import Deal
from attio.resources.list_entries import ListEntry
from attio.resources.list_object import ListObject
from attio.resources.lists import AttioList
from attio.resources.meta import Meta
from attio.resources.notes import Note
from attio.resources.objects import AttioObject
from attio.resources.operations import Creatable, Deletable, Listable, Retrievable, Updatable
from attio.resources.people import Person
from attio.resources.records import Record
from attio.resources.tasks import Task
from attio.resources.threads import Thread
from attio.resources.typed_records import TypedRecord
from attio.resources.webhooks import Webhook
from attio.resources.workspace_members import WorkspaceMember

__all__ = [
    "APIResource",
    "Attribute",
    "AttioList",
    "AttioObject",
    "Comment",
    "Company",
    "Creatable",
    "Deal",
    "Deletable",
    "ListEntry",
    "ListObject",
    "Listable",
    "Meta",
    "Note",
    "Person",
    "Record",
    "ResourceState",
    "Retrievable",
    "Task",
    "Thread",
    "TypedRecord",
    "Updatable",
    "Webhook",
    "WorkspaceMember",
]

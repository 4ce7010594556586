import copy
from typing import Dict, List, Optional
from uuid import uuid4

from chalicelib.utils.db import insert_result, update_result, delete_result
from chalicelib.utils.exceptions import DuplicateRecord, ValidationException


class MemoryCollection:
    """
    In-memory collection with the same interface and result shapes as DynamoCollection
    """

    def __init__(self, documents=None):
        self.documents: Dict[str, Dict] = {}
        for document in documents or []:
            self.insert_one(document)

    @staticmethod
    def _matches(document: Dict, query: Optional[Dict]) -> bool:
        for field, expected in (query or {}).items():
            value = document.get(field)
            if isinstance(expected, dict) and '$in' in expected:
                if value not in expected['$in']:
                    return False
            elif value != expected:
                return False
        return True

    def find(self, query: Dict = None) -> List[Dict]:
        return [copy.deepcopy(document) for document in self.documents.values() if self._matches(document, query)]

    def find_one(self, query: Dict) -> Optional[Dict]:
        documents = self.find(query)
        return documents[0] if documents else None

    def insert_one(self, document: Dict) -> Dict:
        document = copy.deepcopy(document)
        id_ = document.get('id')
        id_ = uuid4().hex if id_ is None else str(id_)
        if not id_:
            raise ValidationException('id must not be empty')
        if id_ in self.documents:
            raise DuplicateRecord(f'record id={id_} already exists')
        document['id'] = id_
        self.documents[id_] = document
        return insert_result(id_)

    def update_one(self, query: Dict, update: Dict, upsert: bool = False) -> Dict:
        fields = update.get('$set', {})
        existing = self.find_one(query)
        if existing is None:
            if not upsert:
                return update_result(0, 0)
            document = {**{k: v for k, v in query.items() if not isinstance(v, dict)}, **fields}
            return update_result(0, 0, upserted_id=self.insert_one(document)['insertedId'])
        stored = self.documents[existing['id']]
        modified = any(stored.get(field) != value for field, value in fields.items())
        stored.update(copy.deepcopy(fields))
        return update_result(1, int(modified))

    def delete_one(self, query: Dict) -> Dict:
        document = self.find_one(query)
        if document is None:
            return delete_result(0)
        del self.documents[document['id']]
        return delete_result(1)

    def delete_many(self, query: Dict) -> Dict:
        ids = [document['id'] for document in self.find(query)]
        for id_ in ids:
            del self.documents[id_]
        return delete_result(len(ids))

    def count(self, query: Dict = None) -> int:
        return len(self.find(query))


class MemoryStore:

    def __init__(self):
        self.users = MemoryCollection()
        self.menu = MemoryCollection()
        self.reviews = MemoryCollection()
        self.carts = MemoryCollection()
        self.payments = MemoryCollection()

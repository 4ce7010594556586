import functools
import os
import time
from random import uniform
from typing import Dict, List, Optional
from uuid import uuid4

import boto3
from boto3.dynamodb.conditions import Attr, Key
from botocore.config import Config
from botocore.exceptions import ClientError

from chalicelib.constants import keys_structure
from chalicelib.utils import data
from chalicelib.utils import exceptions
from chalicelib.utils.logger import logger, log_exception

# For safe db operations
RETRY_EXCEPTIONS = ('ProvisionedThroughputExceededException', 'ThrottlingException')
need_return_capacity = ('put_item', 'get_item', 'update_item', 'delete_item', 'query')
MAX_RETRIES = 8
MAX_BACKOFF_SECONDS = 5

aws_config_ddb = Config(retries={'max_attempts': 30}, region_name=os.environ.get('AWS_REGION', 'eu-central-1'))

_TABLES = {}


def exp_db_backoff(func):
    """
        should be used for any atomic
        get/put item in the code
    """

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        logger.debug(f'{func.__name__}:: args={args}, kwargs={kwargs}')
        if func.__name__ not in need_return_capacity:
            raise RuntimeError("This decorator only for DynamoDB methods")
        kwargs.update({'ReturnConsumedCapacity': 'TOTAL'})
        timeout_seed = uniform(0.1, 0.99)

        for retries in range(MAX_RETRIES):
            try:
                result = func(*args, **kwargs)
                logger.info(f'{func.__name__}:: SUCCESS')
                return result
            except ClientError as e:
                if e.response.get('Error', {}).get('Code') not in RETRY_EXCEPTIONS:
                    log_exception(e, msg=f'Got exception while trying to {func.__name__}: ')
                    raise
                logger.warning(f'{func.__name__}:: throttled, attempt={retries + 1}')
                time.sleep(min(timeout_seed * 2 ** retries, MAX_BACKOFF_SECONDS))

        raise exceptions.NumberOfRetriesExceeded(
            f"MaxNumber={MAX_RETRIES} of DB retries has exceeded"
        )

    return wrapper


def get_table(table_name: str):
    if not table_name:
        raise exceptions.ConfigurationError('GEN_TABLE_NAME is not set')
    if table_name not in _TABLES:
        if os.environ.get('ENDPOINT_URL'):
            table = boto3.resource('dynamodb', endpoint_url=os.environ.get('ENDPOINT_URL'),
                                   config=aws_config_ddb).Table(table_name)
        else:
            table = boto3.resource('dynamodb', config=aws_config_ddb).Table(table_name)

        table.put_item = exp_db_backoff(table.put_item)
        table.get_item = exp_db_backoff(table.get_item)
        table.update_item = exp_db_backoff(table.update_item)
        table.delete_item = exp_db_backoff(table.delete_item)
        table.query = exp_db_backoff(table.query)
        _TABLES[table_name] = table

    return _TABLES[table_name]


def get_gen_table():
    return get_table(os.environ.get('GEN_TABLE_NAME'))


def is_conditional_check_failure(error: ClientError) -> bool:
    return error.response.get('Error', {}).get('Code') == 'ConditionalCheckFailedException'


def generate_update_expression(update_body: dict):
    """
    Generate SET expression for every attribute of update_body which has a value.
    Attribute names are always passed as placeholders, so reserved words are safe.
    """
    expr_attr_names = {}
    expr_attr_values = {}
    set_parts = []
    for index, (field, field_value) in enumerate(update_body.items()):
        if field_value is None:
            continue
        expr_attr_names[f'#attr{index}'] = field
        expr_attr_values[f':val{index}'] = field_value
        set_parts.append(f'#attr{index} = :val{index}')

    if not set_parts:
        return None, {}, {}
    return 'SET ' + ', '.join(set_parts), expr_attr_names, expr_attr_values


def get_db_item(partkey, sortkey, table=get_gen_table):
    result = table().get_item(
        Key={
            'partkey': partkey,
            'sortkey': sortkey
        }
    )

    if 'Item' in result:
        return result['Item']
    else:
        logger.info(f"get_db_item ::: record partkey={partkey} sortkey={sortkey} not found")
        raise exceptions.RecordNotFound(f'record partkey={partkey} sortkey={sortkey} not found')


def query_items_paginated(
        key_condition_expression,
        filter_expression=None,
        projection_expression=None,
        table=get_gen_table,
        index_name=None,
        expr_attr_names=None,
        limit=None,
        start_key=None
):
    kwargs = {'KeyConditionExpression': key_condition_expression}
    if filter_expression:
        kwargs.update({'FilterExpression': filter_expression})

    if projection_expression:
        kwargs.update({'ProjectionExpression': projection_expression})

    if expr_attr_names:
        kwargs.update({'ExpressionAttributeNames': expr_attr_names})

    if limit:
        kwargs.update({'Limit': int(limit)})

    if index_name:
        kwargs.update({'IndexName': index_name})

    if start_key:
        kwargs.update({'ExclusiveStartKey': start_key})

    resp = table().query(**kwargs)
    return resp['Items'], resp.get('LastEvaluatedKey')


def query_items_paged(key_condition_expression, filter_expression=None, projection_expression=None,
                      table=get_gen_table, index_name=None, expr_attr_names=None):
    """ This method shall be used whenever you think the query will
        return more than 1mb of data at once"""
    all_items = []
    items, last_evaluated_key = query_items_paginated(
        key_condition_expression,
        filter_expression=filter_expression,
        projection_expression=projection_expression,
        table=table,
        index_name=index_name,
        expr_attr_names=expr_attr_names
    )
    all_items.extend(items)

    while last_evaluated_key is not None:
        items, last_evaluated_key = query_items_paginated(
            key_condition_expression,
            filter_expression=filter_expression,
            projection_expression=projection_expression,
            table=table,
            index_name=index_name,
            expr_attr_names=expr_attr_names,
            start_key=last_evaluated_key
        )
        all_items.extend(items)

    return all_items


def count_items(key_condition_expression, table=get_gen_table) -> int:
    kwargs = {'KeyConditionExpression': key_condition_expression, 'Select': 'COUNT'}
    total = 0
    while True:
        resp = table().query(**kwargs)
        total += resp['Count']
        if not resp.get('LastEvaluatedKey'):
            return total
        kwargs['ExclusiveStartKey'] = resp['LastEvaluatedKey']


def build_filter_expression(query: Optional[Dict]):
    """
    Equality on every field of the query, `{'field': {'$in': [...]}}` for membership
    """
    condition = None
    for field, value in (query or {}).items():
        attr = Attr(keys_structure.db_attribute_names.get(field, field))
        if isinstance(value, dict) and '$in' in value:
            clause = attr.is_in(list(value['$in']))
        else:
            clause = attr.eq(value)
        condition = clause if condition is None else condition & clause
    return condition


def is_id_query(query: Optional[Dict]) -> bool:
    return bool(query) and set(query) == {'id'} and not isinstance(query['id'], dict)


def has_empty_membership(query: Optional[Dict]) -> bool:
    return any(isinstance(value, dict) and not value.get('$in') for value in (query or {}).values())


def to_document(record: Dict) -> Dict:
    document = dict(record)
    data.substitute_keys_from_db(document)
    return document


def insert_result(inserted_id: str) -> Dict:
    return {'acknowledged': True, 'insertedId': inserted_id}


def update_result(matched: int, modified: int, upserted_id: str = None) -> Dict:
    return {
        'acknowledged': True,
        'matchedCount': matched,
        'modifiedCount': modified,
        'upsertedCount': 1 if upserted_id else 0,
        'upsertedId': upserted_id
    }


def delete_result(deleted: int) -> Dict:
    return {'acknowledged': True, 'deletedCount': deleted}


class DynamoCollection:
    """
    Document collection stored in the general table.
    Every document of the collection lives under partkey=<collection name>, sortkey=<document id>.
    """

    def __init__(self, name: str, table=get_gen_table):
        self.name = name
        self.table = table

    def _key(self, id_: str) -> Dict:
        return {'partkey': self.name, 'sortkey': id_}

    def find(self, query: Dict = None) -> List[Dict]:
        if has_empty_membership(query):
            return []
        records = query_items_paged(
            Key('partkey').eq(self.name),
            filter_expression=build_filter_expression(query),
            table=self.table
        )
        return [to_document(record) for record in records]

    def find_one(self, query: Dict) -> Optional[Dict]:
        if is_id_query(query):
            try:
                return to_document(get_db_item(self.name, query['id'], table=self.table))
            except exceptions.RecordNotFound:
                return None
        documents = self.find(query)
        return documents[0] if documents else None

    def insert_one(self, document: Dict) -> Dict:
        record = dict(document)
        id_ = record.pop('id', None)
        id_ = uuid4().hex if id_ is None else str(id_)
        if not id_:
            raise exceptions.ValidationException('id must not be empty')
        data.substitute_keys_to_db(record)
        record.update({'partkey': self.name, 'sortkey': id_, 'id_': id_})
        try:
            self.table().put_item(Item=record, ConditionExpression='attribute_not_exists(sortkey)')
        except ClientError as error:
            if is_conditional_check_failure(error):
                raise exceptions.DuplicateRecord(f'{self.name} record id={id_} already exists')
            raise
        logger.info(f"insert_one ::: {self.name=} {id_=} successfully created")
        return insert_result(id_)

    def update_one(self, query: Dict, update: Dict, upsert: bool = False) -> Dict:
        fields = dict(update.get('$set', {}))
        if is_id_query(query):
            id_ = query['id']
        else:
            existing = self.find_one(query)
            if existing is None and not upsert:
                return update_result(0, 0)
            if existing is None:
                id_ = uuid4().hex
                fields = {**{k: v for k, v in query.items() if not isinstance(v, dict)}, **fields}
            else:
                id_ = existing['id']

        fields.pop('id', None)
        data.substitute_keys_to_db(fields)
        fields['id_'] = id_
        set_expr, expr_attr_names, expr_attr_values = generate_update_expression(fields)
        update_item_dict = {
            'Key': self._key(id_),
            'UpdateExpression': set_expr,
            'ExpressionAttributeNames': expr_attr_names,
            'ExpressionAttributeValues': expr_attr_values,
            'ReturnValues': 'ALL_OLD'
        }
        if not upsert:
            update_item_dict['ConditionExpression'] = 'attribute_exists(sortkey)'

        try:
            response = self.table().update_item(**update_item_dict)
        except ClientError as error:
            if is_conditional_check_failure(error):
                return update_result(0, 0)
            raise

        old_record = response.get('Attributes')
        if old_record is None:
            logger.info(f"update_one ::: {self.name=} {id_=} upserted")
            return update_result(0, 0, upserted_id=id_)
        modified = any(old_record.get(field) != value for field, value in fields.items() if value is not None)
        logger.info(f"update_one ::: {self.name=} {id_=} successfully updated, {modified=}")
        return update_result(1, int(modified))

    def _delete_by_id(self, id_: str) -> int:
        response = self.table().delete_item(Key=self._key(id_), ReturnValues='ALL_OLD')
        return 1 if response.get('Attributes') else 0

    def delete_one(self, query: Dict) -> Dict:
        if is_id_query(query):
            id_ = query['id']
        else:
            document = self.find_one(query)
            if document is None:
                return delete_result(0)
            id_ = document['id']
        return delete_result(self._delete_by_id(id_))

    def delete_many(self, query: Dict) -> Dict:
        id_filter = (query or {}).get('id')
        if set(query or {}) == {'id'} and isinstance(id_filter, dict) and '$in' in id_filter:
            ids = list(dict.fromkeys(id_filter['$in']))
        elif is_id_query(query):
            ids = [query['id']]
        else:
            ids = [document['id'] for document in self.find(query)]

        deleted = sum(self._delete_by_id(id_) for id_ in ids)
        logger.info(f"delete_many ::: {self.name=} requested={len(ids)} {deleted=}")
        return delete_result(deleted)

    def count(self, query: Dict = None) -> int:
        if query:
            return len(self.find(query))
        return count_items(Key('partkey').eq(self.name), table=self.table)


class Store:
    """
    All collections of the service, sharing one table
    """

    def __init__(self, table=get_gen_table):
        self.users = DynamoCollection(keys_structure.users_collection, table)
        self.menu = DynamoCollection(keys_structure.menu_collection, table)
        self.reviews = DynamoCollection(keys_structure.reviews_collection, table)
        self.carts = DynamoCollection(keys_structure.carts_collection, table)
        self.payments = DynamoCollection(keys_structure.payments_collection, table)

# partkey of every collection in the general table, sortkey is the document id
users_collection = 'users'
menu_collection = 'menu'
reviews_collection = 'reviews'
carts_collection = 'carts'
payments_collection = 'payments'

# document field -> db attribute, `id` and `name` are DynamoDB reserved words
db_attribute_names = {
    'id': 'id_',
    'name': 'name_'
}

import os

from chalice import Chalice, Response

from chalicelib import auth, users, menu_items, reviews, carts, payments, admin_stats

app = Chalice(app_name='restaurant-menu-service')

app.debug = os.environ.get('DEBUG', 'false').lower() == 'true'


@app.route('/', methods=['GET'], cors=True)
def index():
    return Response(status_code=200, body='Restaurant menu service is running',
                    headers={'Content-Type': 'text/plain'})


# TOKENS
@app.route('/jwt', methods=['POST'], cors=True)
def issue_token():
    return auth.Token.init_endpoint(app.current_request).endpoint_issue_token()


# USERS
@app.route('/users/admin/{user}', methods=['GET'], cors=True)
def check_admin(user):
    """
    user can check only his own admin flag, {user} is an email
    """
    return users.User.init_endpoint(app.current_request).endpoint_check_admin(user)


@app.route('/users/admin/{user}', methods=['PATCH'], cors=True)
def set_admin(user):
    """
    admin operation, {user} is a user id
    """
    return users.User.init_endpoint(app.current_request).endpoint_set_admin(user)


@app.route('/users', methods=['GET'], cors=True)
def get_users():
    """
    admin operation
    """
    return users.User.init_endpoint(app.current_request).endpoint_get_users()


@app.route('/users/{user_id}', methods=['DELETE'], cors=True)
def delete_user(user_id):
    """
    admin operation
    """
    return users.User.init_endpoint(app.current_request).endpoint_delete_user(user_id)


@app.route('/users', methods=['POST'], cors=True)
def register_user():
    return users.User.init_endpoint(app.current_request).endpoint_register_user()


# MENU
@app.route('/menu', methods=['GET'], cors=True)
def get_menu():
    return menu_items.MenuItem.init_endpoint(app.current_request).endpoint_get_menu_items()


@app.route('/menu/{menu_item_id}', methods=['GET'], cors=True)
def get_menu_item(menu_item_id):
    return menu_items.MenuItem.init_endpoint(app.current_request).endpoint_get_menu_item(menu_item_id)


@app.route('/menu/{menu_item_id}', methods=['DELETE'], cors=True)
def delete_menu_item(menu_item_id):
    """
    admin operation
    """
    return menu_items.MenuItem.init_endpoint(app.current_request).endpoint_delete_menu_item(menu_item_id)


@app.route('/menu/{menu_item_id}', methods=['POST'], cors=True)
def upsert_menu_item(menu_item_id):
    """
    admin operation
    """
    return menu_items.MenuItem.init_endpoint(app.current_request).endpoint_upsert_menu_item(menu_item_id)


@app.route('/menu', methods=['POST'], cors=True)
def create_menu_item():
    """
    admin operation
    """
    return menu_items.MenuItem.init_endpoint(app.current_request).endpoint_create_menu_item()


# REVIEWS
@app.route('/reviews', methods=['GET'], cors=True)
def get_reviews():
    return reviews.Review.init_endpoint(app.current_request).endpoint_get_reviews()


# CART
@app.route('/carts', methods=['POST'], cors=True)
def add_item_to_cart():
    return carts.Cart.init_endpoint(app.current_request).endpoint_add_item_to_cart()


@app.route('/carts', methods=['GET'], cors=True)
def get_cart():
    """
    user can get only his own cart items
    """
    return carts.Cart.init_endpoint(app.current_request).endpoint_get_cart()


@app.route('/carts', methods=['DELETE'], cors=True)
def remove_item_from_cart():
    """
    cart item owner or admin
    """
    return carts.Cart.init_endpoint(app.current_request).endpoint_remove_item_from_cart()


# PAYMENTS
@app.route('/create-payment-intent', methods=['POST'], cors=True)
def create_payment_intent():
    return payments.Payment.init_endpoint(app.current_request).endpoint_create_payment_intent()


@app.route('/payments', methods=['POST'], cors=True)
def record_payment():
    """
    The endpoint records a payment and clears the paid cart items
    Authorization is not needed
    """
    return payments.Payment.init_endpoint(app.current_request).endpoint_record_payment()


@app.route('/payments', methods=['GET'], cors=True)
def get_payments():
    return payments.Payment.init_endpoint(app.current_request).endpoint_get_payments()


# ADMIN
@app.route('/adminstats', methods=['GET'], cors=True)
def get_admin_stats():
    """
    admin operation
    """
    return admin_stats.AdminStats.init_endpoint(app.current_request).endpoint_get_stats()

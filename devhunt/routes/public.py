from flask import Blueprint, render_template, current_app, abort, redirect, url_for

from devhunt import db
from devhunt.pages.category_listing import load_category_listing
from devhunt.seo import PageMetadata, category_metadata
from devhunt.services.categories import CategoryService
from devhunt.services.products import ProductsService

public_bp = Blueprint('public', __name__)


@public_bp.route('/')
def home():
    return redirect(url_for('public.category_tools', slug='ai-tools'))


@public_bp.route('/tools/<slug>')
def category_tools(slug):
    names = current_app.config['CATEGORIES']
    meta = category_metadata(slug, names, current_app.config['SITE_URL'])

    listing = load_category_listing(
        slug,
        names,
        CategoryService(db.session),
        ProductsService(db.session),
        page_size=current_app.config['PRODUCTS_PAGE_SIZE'],
    )
    if listing is None:
        current_app.logger.info("Unknown category slug: %s", slug)
        return render_template('errors/404.html', meta=PageMetadata.not_found()), 404

    return render_template('tools/category.html', listing=listing, meta=meta)


@public_bp.route('/tool/<slug>')
def tool_detail(slug):
    product = ProductsService(db.session).get_by_slug(slug)
    if product is None:
        abort(404)
    meta = PageMetadata(title=product.name, description=product.slogan or '', og_title=product.name,
                        twitter_title=product.name)
    return render_template('tool/detail.html', product=product, meta=meta)

from flask import (Blueprint, render_template, request, redirect, url_for, flash, current_app,
                   session, abort)
from flask_login import login_required, current_user

from devhunt import db
from devhunt.forms.edit_listing import (EditDraft, EditListingForm, LoadStatus, SubmitStatus,
                                        UploadStatus)
from devhunt.services.categories import CategoryService
from devhunt.services.pricing_types import ProductPricingTypesService
from devhunt.services.products import ProductsService

account_bp = Blueprint('account', __name__, url_prefix='/account')

FORM_FIELDS = ('tool_name', 'slogan', 'tool_website', 'github_repo', 'tool_description',
               'demo_video', 'pricing_type')


def _draft_key(product_id):
    return f"edit_draft:{product_id}"


def _build_form(product_id):
    stored = session.get(_draft_key(product_id))
    config = current_app.config
    return EditListingForm(
        product_id,
        ProductsService(db.session),
        ProductPricingTypesService(db.session),
        CategoryService(db.session),
        current_app.extensions['devhunt.uploader'],
        draft=EditDraft.from_dict(stored) if stored is not None else None,
        max_screenshots=config['MAX_SCREENSHOTS'],
        screenshot_width=config['SCREENSHOT_WIDTH'],
        logo_width=config['LOGO_WIDTH'],
    )


def _open_form(product_id, keep_draft):
    form = _build_form(product_id)
    result = form.load(keep_draft=keep_draft)
    if result.status is LoadStatus.NOT_FOUND:
        abort(404)
    if result.status is LoadStatus.SUCCESS and not current_user.can_edit(result.product):
        abort(404)
    return form, result


def _save_draft(form):
    key = _draft_key(form.product_id)
    # One draft per session: an abandoned edit of another listing is dropped
    for stale in [k for k in session if k.startswith("edit_draft:") and k != key]:
        session.pop(stale)
    session[key] = form.draft.to_dict()


def _posted_values():
    data = {name: request.form.get(name, '') for name in FORM_FIELDS}
    data['categories'] = request.form.getlist('categories')
    return data


def _remember_posted(form):
    """Keep what the user typed across upload round trips."""
    if not any(name in request.form for name in FORM_FIELDS):
        return
    form.remember(_posted_values())


def _render(form, values, status=200):
    return render_template(
        'account/edit_tool.html',
        form=form,
        draft=form.draft,
        values=values,
        product_id=form.product_id,
    ), status


def _render_load_error(form, result):
    flash(f"Could not load your launch: {result.message}", 'error')
    return _render(form, {}, 503)


@account_bp.route('/tools/edit/<int:product_id>', methods=['GET'])
@login_required
def edit_tool(product_id):
    keep_draft = request.args.get('draft') == '1'
    form, result = _open_form(product_id, keep_draft)
    if result.status is LoadStatus.ERROR:
        return _render_load_error(form, result)

    _save_draft(form)
    return _render(form, result.values)


@account_bp.route('/tools/edit/<int:product_id>', methods=['POST'])
@login_required
def update_tool(product_id):
    form, result = _open_form(product_id, keep_draft=True)
    if result.status is LoadStatus.ERROR:
        return _render_load_error(form, result)

    posted = _posted_values()
    outcome = form.submit(posted)

    if outcome.status is SubmitStatus.UPDATED:
        session.pop(_draft_key(product_id), None)
        flash('Your launch has been updated successfully', 'success')
        return redirect(url_for('public.tool_detail', slug=outcome.product.slug))

    if outcome.status is SubmitStatus.NOT_FOUND:
        session.pop(_draft_key(product_id), None)
        abort(404)

    _save_draft(form)
    if outcome.status is SubmitStatus.ERROR:
        current_app.logger.error("Update of product %s failed: %s", product_id, outcome.message)
        flash(f"Could not update your launch: {outcome.message}", 'error')
        return _render(form, posted, 503)

    return _render(form, posted)


@account_bp.route('/tools/edit/<int:product_id>/screenshots', methods=['POST'])
@login_required
def upload_screenshot(product_id):
    form, result = _open_form(product_id, keep_draft=True)
    if result.status is LoadStatus.ERROR:
        return _render_load_error(form, result)

    _remember_posted(form)
    status = form.upload_screenshot(request.files.get('screenshot'))
    if status is UploadStatus.IGNORED:
        flash(f"Choose an image file, up to {form.max_screenshots} screenshots", 'info')
    elif status is UploadStatus.FAILED:
        flash('Screenshot upload failed, please try again', 'error')

    _save_draft(form)
    return redirect(url_for('account.edit_tool', product_id=product_id, draft=1))


@account_bp.route('/tools/edit/<int:product_id>/logo', methods=['POST'])
@login_required
def upload_logo(product_id):
    form, result = _open_form(product_id, keep_draft=True)
    if result.status is LoadStatus.ERROR:
        return _render_load_error(form, result)

    _remember_posted(form)
    status = form.upload_logo(request.files.get('logo'))
    if status is UploadStatus.IGNORED:
        flash('Choose an image file for the logo', 'info')
    elif status is UploadStatus.FAILED:
        flash('Logo upload failed, please try again', 'error')

    _save_draft(form)
    return redirect(url_for('account.edit_tool', product_id=product_id, draft=1))


@account_bp.route('/tools/edit/<int:product_id>/screenshots/<int:index>/delete', methods=['POST'])
@login_required
def remove_screenshot(product_id, index):
    form, result = _open_form(product_id, keep_draft=True)
    if result.status is LoadStatus.ERROR:
        return _render_load_error(form, result)

    _remember_posted(form)
    form.remove_screenshot(index)

    _save_draft(form)
    return redirect(url_for('account.edit_tool', product_id=product_id, draft=1))

"""Catalog and site content endpoints.

Listings are public. Creates take multipart forms so an image can be sent
along with the fields; the file is relayed to the media host and its URL
stored. A URL field may be sent instead of a file.
"""

from uuid import UUID

from fastapi import APIRouter, File, Form, UploadFile, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import BadRequestException
from app.core.media import MediaUploader, read_upload, upload_if_present
from app.core.redis_client import CacheManager
from app.dependencies import AdminPrincipal, CacheManagerDep, DatabaseSession, MediaUploaderDep
from app.schemas.catalog import (
    BillingPeriod,
    BlogCreate,
    BlogResponse,
    FloatingTextCreate,
    FloatingTextResponse,
    LuckyEntryCreate,
    LuckyEntryResponse,
    MediaType,
    PlanCreate,
    PlanResponse,
    ProductCreate,
    ProductResponse,
    ReviewCreate,
    ReviewResponse,
    UploadResponse,
)
from app.schemas.common import SuccessResponse
from app.services.content_service import (
    ContentStore,
    blog_store,
    floating_text_store,
    lucky_farmer_store,
    lucky_subscriber_store,
    plan_store,
    product_store,
    resolve_media_type,
    review_store,
)

router = APIRouter(tags=["Catalog"])


# ============================================================================
# Products
# ============================================================================


@router.get("/products", response_model=list[ProductResponse], summary="List products")
async def list_products(db: DatabaseSession, cache: CacheManagerDep):
    """All products, newest first."""
    return await product_store.list_all(db, cache)


@router.post(
    "/products",
    response_model=ProductResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a product (admin)",
)
async def create_product(
    db: DatabaseSession,
    cache: CacheManagerDep,
    uploader: MediaUploaderDep,
    admin: AdminPrincipal,
    name: str = Form(..., min_length=1, max_length=200),
    description: str | None = Form(None),
    price: float | None = Form(None, ge=0),
    video_url: str | None = Form(None),
    whatsapp_number: str | None = Form(None, max_length=20),
    image_url: str | None = Form(None),
    image: UploadFile | None = File(None),
):
    """Create a product, optionally with an uploaded image."""
    uploaded = await upload_if_present(uploader, image)
    data = ProductCreate(
        name=name,
        description=description,
        price=price,
        video_url=video_url,
        whatsapp_number=whatsapp_number,
        image_url=uploaded or image_url,
    )
    return await product_store.create(db, data.model_dump(), cache)


@router.delete("/products/{item_id}", response_model=SuccessResponse, summary="Delete a product (admin)")
async def delete_product(
    item_id: UUID,
    db: DatabaseSession,
    cache: CacheManagerDep,
    admin: AdminPrincipal,
):
    """Delete a product."""
    await product_store.delete(db, item_id, cache)
    return SuccessResponse()


# ============================================================================
# Blogs
# ============================================================================


@router.get("/blogs", response_model=list[BlogResponse], summary="List blog posts")
async def list_blogs(db: DatabaseSession, cache: CacheManagerDep):
    """All blog posts, newest first."""
    return await blog_store.list_all(db, cache)


@router.post(
    "/blogs",
    response_model=BlogResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a blog post (admin)",
)
async def create_blog(
    db: DatabaseSession,
    cache: CacheManagerDep,
    uploader: MediaUploaderDep,
    admin: AdminPrincipal,
    title: str = Form(..., min_length=1, max_length=300),
    content: str | None = Form(None),
    media_type: MediaType | None = Form(None),
    media_url: str | None = Form(None),
    media: UploadFile | None = File(None),
):
    """
    Create a blog post with an optional image or video.

    The media type is taken from the hint, else detected from the uploaded
    file's MIME type.
    """
    uploaded_type = None
    if media is not None and media.filename:
        uploaded_type = media.content_type or ""
        kind = resolve_media_type(media_type, uploaded_type, None)
        media_url = await upload_if_present(uploader, media, resource_type=kind.value)

    data = BlogCreate(
        title=title,
        content=content,
        media_type=resolve_media_type(media_type, uploaded_type, media_url),
        media_url=media_url,
    )
    return await blog_store.create(db, data.model_dump(mode="json"), cache)


@router.delete("/blogs/{item_id}", response_model=SuccessResponse, summary="Delete a blog post (admin)")
async def delete_blog(
    item_id: UUID,
    db: DatabaseSession,
    cache: CacheManagerDep,
    admin: AdminPrincipal,
):
    """Delete a blog post."""
    await blog_store.delete(db, item_id, cache)
    return SuccessResponse()


# ============================================================================
# Reviews
# ============================================================================


@router.get("/reviews", response_model=list[ReviewResponse], summary="List reviews")
async def list_reviews(db: DatabaseSession, cache: CacheManagerDep):
    """All customer reviews, newest first."""
    return await review_store.list_all(db, cache)


@router.post(
    "/reviews",
    response_model=ReviewResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a review (admin)",
)
async def create_review(
    db: DatabaseSession,
    cache: CacheManagerDep,
    uploader: MediaUploaderDep,
    admin: AdminPrincipal,
    text: str = Form(..., min_length=1),
    name: str | None = Form(None, max_length=200),
    image_url: str | None = Form(None),
    image: UploadFile | None = File(None),
):
    """Publish a customer review."""
    uploaded = await upload_if_present(uploader, image)
    data = ReviewCreate(name=name, text=text, image_url=uploaded or image_url)
    return await review_store.create(db, data.model_dump(), cache)


@router.delete("/reviews/{item_id}", response_model=SuccessResponse, summary="Delete a review (admin)")
async def delete_review(
    item_id: UUID,
    db: DatabaseSession,
    cache: CacheManagerDep,
    admin: AdminPrincipal,
):
    """Delete a review."""
    await review_store.delete(db, item_id, cache)
    return SuccessResponse()


# ============================================================================
# Plans
# ============================================================================


@router.get("/plans", response_model=list[PlanResponse], summary="List plans")
async def list_plans(db: DatabaseSession, cache: CacheManagerDep):
    """Subscription plans by display order, then newest first."""
    return await plan_store.list_all(db, cache)


@router.post(
    "/plans",
    response_model=PlanResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a plan (admin)",
)
async def create_plan(
    db: DatabaseSession,
    cache: CacheManagerDep,
    uploader: MediaUploaderDep,
    admin: AdminPrincipal,
    title: str = Form(..., min_length=1, max_length=200),
    price: float = Form(..., ge=0),
    billing_period: BillingPeriod = Form(...),
    features: str | None = Form(None, description="JSON array or comma-separated list"),
    description: str | None = Form(None),
    popular: bool = Form(False),
    display_order: int = Form(0),
    image_url: str | None = Form(None),
    image: UploadFile | None = File(None),
):
    """Create a subscription plan."""
    uploaded = await upload_if_present(uploader, image)
    data = PlanCreate(
        title=title,
        price=price,
        billing_period=billing_period,
        features=features,
        description=description,
        popular=popular,
        display_order=display_order,
        image_url=uploaded or image_url,
    )
    return await plan_store.create(db, data.model_dump(mode="json"), cache)


@router.delete("/plans/{item_id}", response_model=SuccessResponse, summary="Delete a plan (admin)")
async def delete_plan(
    item_id: UUID,
    db: DatabaseSession,
    cache: CacheManagerDep,
    admin: AdminPrincipal,
):
    """Delete a plan."""
    await plan_store.delete(db, item_id, cache)
    return SuccessResponse()


# ============================================================================
# Floating text
# ============================================================================


@router.get(
    "/floating-text",
    response_model=FloatingTextResponse | None,
    summary="Current floating banner text",
)
async def get_floating_text(db: DatabaseSession):
    """The most recently created banner text, or null."""
    return await floating_text_store.latest(db)


@router.post(
    "/floating-text",
    response_model=FloatingTextResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Set floating banner text (admin)",
)
async def create_floating_text(data: FloatingTextCreate, db: DatabaseSession, admin: AdminPrincipal):
    """Add banner text; the newest entry is the one shown."""
    return await floating_text_store.create(db, data.model_dump())


@router.delete(
    "/floating-text/{item_id}",
    response_model=SuccessResponse,
    summary="Delete floating banner text (admin)",
)
async def delete_floating_text(item_id: UUID, db: DatabaseSession, admin: AdminPrincipal):
    """Delete a banner text entry."""
    await floating_text_store.delete(db, item_id)
    return SuccessResponse()


# ============================================================================
# Lucky draw winners
# ============================================================================


async def _create_lucky_entry(
    store: ContentStore,
    db: AsyncSession,
    cache: CacheManager | None,
    uploader: MediaUploader,
    name: str,
    content: str | None,
    phone: str | None,
    image_url: str | None,
    image: UploadFile | None,
):
    uploaded = await upload_if_present(uploader, image)
    data = LuckyEntryCreate(name=name, content=content, phone=phone, image_url=uploaded or image_url)
    return await store.create(db, data.model_dump(), cache)


@router.get("/lucky-farmers", response_model=list[LuckyEntryResponse], summary="List lucky farmers")
async def list_lucky_farmers(db: DatabaseSession, cache: CacheManagerDep):
    """Lucky draw farmers, newest first."""
    return await lucky_farmer_store.list_all(db, cache)


@router.post(
    "/lucky-farmers",
    response_model=LuckyEntryResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Add a lucky farmer (admin)",
)
async def create_lucky_farmer(
    db: DatabaseSession,
    cache: CacheManagerDep,
    uploader: MediaUploaderDep,
    admin: AdminPrincipal,
    name: str = Form(..., min_length=1, max_length=200),
    content: str | None = Form(None),
    phone: str | None = Form(None, max_length=20),
    image_url: str | None = Form(None),
    image: UploadFile | None = File(None),
):
    """Add a lucky draw farmer."""
    return await _create_lucky_entry(
        lucky_farmer_store, db, cache, uploader, name, content, phone, image_url, image
    )


@router.delete(
    "/lucky-farmers/{item_id}",
    response_model=SuccessResponse,
    summary="Delete a lucky farmer (admin)",
)
async def delete_lucky_farmer(
    item_id: UUID,
    db: DatabaseSession,
    cache: CacheManagerDep,
    admin: AdminPrincipal,
):
    """Delete a lucky draw farmer."""
    await lucky_farmer_store.delete(db, item_id, cache)
    return SuccessResponse()


@router.get(
    "/lucky-subscribers",
    response_model=list[LuckyEntryResponse],
    summary="List lucky subscribers",
)
async def list_lucky_subscribers(db: DatabaseSession, cache: CacheManagerDep):
    """Lucky draw subscribers, newest first."""
    return await lucky_subscriber_store.list_all(db, cache)


@router.post(
    "/lucky-subscribers",
    response_model=LuckyEntryResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Add a lucky subscriber (admin)",
)
async def create_lucky_subscriber(
    db: DatabaseSession,
    cache: CacheManagerDep,
    uploader: MediaUploaderDep,
    admin: AdminPrincipal,
    name: str = Form(..., min_length=1, max_length=200),
    content: str | None = Form(None),
    phone: str | None = Form(None, max_length=20),
    image_url: str | None = Form(None),
    image: UploadFile | None = File(None),
):
    """Add a lucky draw subscriber."""
    return await _create_lucky_entry(
        lucky_subscriber_store, db, cache, uploader, name, content, phone, image_url, image
    )


@router.delete(
    "/lucky-subscribers/{item_id}",
    response_model=SuccessResponse,
    summary="Delete a lucky subscriber (admin)",
)
async def delete_lucky_subscriber(
    item_id: UUID,
    db: DatabaseSession,
    cache: CacheManagerDep,
    admin: AdminPrincipal,
):
    """Delete a lucky draw subscriber."""
    await lucky_subscriber_store.delete(db, item_id, cache)
    return SuccessResponse()


# ============================================================================
# Media
# ============================================================================


@router.post(
    "/upload-image",
    response_model=UploadResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Upload an image (admin)",
)
async def upload_image(
    uploader: MediaUploaderDep,
    admin: AdminPrincipal,
    image: UploadFile | None = File(None),
):
    """
    Relay an image to the media host.

    Raises:
        BadRequestException: If no image was sent
        MediaUploadException: If the media host fails
    """
    if image is None or not image.filename:
        raise BadRequestException("No image uploaded")
    content = await read_upload(image)
    url = await uploader.upload(content, image.filename, image.content_type)
    return UploadResponse(url=url)

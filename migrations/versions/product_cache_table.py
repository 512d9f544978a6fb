"""Alembic 마이그레이션: ProductCache 테이블 추가"""
from alembic import op
import sqlalchemy as sa

revision = "0001_product_cache"
down_revision = None


def upgrade():
    """소스별 상품 캐시 테이블 생성"""
    op.create_table(
        'product_cache',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('source', sa.String(50), nullable=False),
        sa.Column('search_term', sa.String(500), nullable=False),
        sa.Column('products_json', sa.Text(), nullable=False),
        sa.Column('updated_at', sa.TIMESTAMP(), nullable=False, server_default=sa.func.now()),
        sa.PrimaryKeyConstraint('id')
    )

    # 인덱스 추가
    op.create_index('ix_product_cache_id', 'product_cache', ['id'])
    op.create_index('ix_product_cache_source', 'product_cache', ['source'])
    op.create_index('ix_product_cache_updated_at', 'product_cache', ['updated_at'])
    op.create_index('idx_product_cache_source_term', 'product_cache', ['source', 'search_term'], unique=True)


def downgrade():
    """테이블 삭제"""
    op.drop_index('idx_product_cache_source_term', table_name='product_cache')
    op.drop_index('ix_product_cache_updated_at', table_name='product_cache')
    op.drop_index('ix_product_cache_source', table_name='product_cache')
    op.drop_index('ix_product_cache_id', table_name='product_cache')
    op.drop_table('product_cache')

import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='Course',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('title', models.CharField(max_length=200, verbose_name='عنوان المقرر')),
                ('description', models.TextField(verbose_name='الوصف')),
                ('category', models.CharField(max_length=100, verbose_name='التصنيف')),
                ('level', models.CharField(choices=[('beginner', 'مبتدئ'), ('intermediate', 'متوسط'), ('advanced', 'متقدم')], default='beginner', max_length=20, verbose_name='المستوى')),
                ('thumbnail', models.CharField(blank=True, default='', max_length=500, verbose_name='الصورة المصغرة')),
                ('price', models.DecimalField(decimal_places=2, default=0, max_digits=10, verbose_name='السعر')),
                ('duration', models.PositiveIntegerField(default=0, verbose_name='المدة (دقائق)')),
                ('tags', models.CharField(blank=True, default='', help_text='مفصولة بفواصل', max_length=500, verbose_name='الوسوم')),
                ('is_active', models.BooleanField(default=True, verbose_name='نشط')),
                ('created_at', models.DateTimeField(auto_now_add=True, verbose_name='تاريخ الإنشاء')),
                ('updated_at', models.DateTimeField(auto_now=True, verbose_name='تاريخ التحديث')),
                ('enrolled_students', models.ManyToManyField(blank=True, related_name='enrolled_courses', to=settings.AUTH_USER_MODEL, verbose_name='الطلاب المسجلون')),
                ('instructor', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='taught_courses', to=settings.AUTH_USER_MODEL, verbose_name='المدرس')),
            ],
            options={
                'verbose_name': 'مقرر',
                'verbose_name_plural': 'المقررات',
                'db_table': 'courses',
                'ordering': ['-created_at'],
            },
        ),
        migrations.CreateModel(
            name='Video',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('title', models.CharField(max_length=200, verbose_name='العنوان')),
                ('description', models.TextField(blank=True, default='', verbose_name='الوصف')),
                ('video_file', models.FileField(upload_to='videos/', verbose_name='ملف الفيديو')),
                ('original_name', models.CharField(blank=True, default='', max_length=255, verbose_name='الاسم الأصلي')),
                ('file_size', models.PositiveBigIntegerField(default=0, verbose_name='الحجم (بايت)')),
                ('mime_type', models.CharField(blank=True, default='', max_length=100, verbose_name='نوع المحتوى')),
                ('order', models.IntegerField(default=0, verbose_name='الترتيب')),
                ('duration', models.PositiveIntegerField(default=0, verbose_name='المدة (ثواني)')),
                ('thumbnail', models.CharField(blank=True, default='', max_length=500, verbose_name='الصورة المصغرة')),
                ('views', models.PositiveIntegerField(default=0, verbose_name='المشاهدات')),
                ('is_active', models.BooleanField(default=True, verbose_name='نشط')),
                ('created_at', models.DateTimeField(auto_now_add=True, verbose_name='تاريخ الرفع')),
                ('updated_at', models.DateTimeField(auto_now=True, verbose_name='تاريخ التحديث')),
                ('course', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='videos', to='courses.course', verbose_name='المقرر')),
                ('uploaded_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='uploaded_videos', to=settings.AUTH_USER_MODEL, verbose_name='رفع بواسطة')),
            ],
            options={
                'verbose_name': 'فيديو',
                'verbose_name_plural': 'الفيديوهات',
                'db_table': 'videos',
                'ordering': ['order', 'created_at'],
                'indexes': [models.Index(fields=['course', 'order'], name='videos_course_order_idx')],
            },
        ),
        migrations.CreateModel(
            name='CourseFile',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('title', models.CharField(max_length=200, verbose_name='العنوان')),
                ('description', models.TextField(blank=True, default='', verbose_name='الوصف')),
                ('local_file', models.FileField(upload_to='files/', verbose_name='الملف')),
                ('original_name', models.CharField(blank=True, default='', max_length=255, verbose_name='الاسم الأصلي')),
                ('file_size', models.PositiveBigIntegerField(default=0, verbose_name='الحجم (بايت)')),
                ('mime_type', models.CharField(blank=True, default='', max_length=100, verbose_name='نوع المحتوى')),
                ('file_type', models.CharField(choices=[('pdf', 'PDF'), ('doc', 'Word'), ('txt', 'نص'), ('ppt', 'عرض تقديمي'), ('xls', 'جدول بيانات'), ('zip', 'ملف مضغوط'), ('image', 'صورة'), ('other', 'أخرى')], default='other', max_length=10, verbose_name='نوع الملف')),
                ('order', models.IntegerField(default=0, verbose_name='الترتيب')),
                ('downloads', models.PositiveIntegerField(default=0, verbose_name='التحميلات')),
                ('tags', models.CharField(blank=True, default='', max_length=500, verbose_name='الوسوم')),
                ('is_active', models.BooleanField(default=True, verbose_name='نشط')),
                ('created_at', models.DateTimeField(auto_now_add=True, verbose_name='تاريخ الرفع')),
                ('updated_at', models.DateTimeField(auto_now=True, verbose_name='تاريخ التحديث')),
                ('course', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='files', to='courses.course', verbose_name='المقرر')),
                ('uploaded_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='uploaded_files', to=settings.AUTH_USER_MODEL, verbose_name='رفع بواسطة')),
                ('video', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='files', to='courses.video', verbose_name='الفيديو المرتبط')),
            ],
            options={
                'verbose_name': 'ملف مقرر',
                'verbose_name_plural': 'ملفات المقررات',
                'db_table': 'course_files',
                'ordering': ['order', 'created_at'],
                'indexes': [models.Index(fields=['course', 'order'], name='course_files_course_order_idx')],
            },
        ),
    ]
